"""Vulnerability scanning with nuclei and storage of its reports."""

import dataclasses
import os
from typing import Iterable

from spike.config import NucleiConfig
from spike.db import Database, make_args_list
from spike.utils import is_directory, is_file, run_command_with_stdin

SQL_CREATE_NUCLEI_TABLE = """
CREATE TABLE IF NOT EXISTS nuclei (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	report TEXT NOT NULL,
	created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_NUCLEI_REPORT = "INSERT INTO nuclei (domain_id, report) VALUES (?, ?);"


class NucleiConfigError(ValueError):
    """Raised when a nuclei configuration cannot be used for a scan."""


class HeadlessDomXSSConflict(NucleiConfigError):
    """Raised when headless templates and the DOM XSS scan are both enabled."""

    def __init__(self) -> None:
        super().__init__("internal: headless and DOM XSS conflict")


def _validate_templates_path(path: str) -> None:
    if path == "":
        raise NucleiConfigError("path cannot be empty")
    if not is_directory(path):
        raise NucleiConfigError(f"{path} is not a directory")


def _validate_template_path(path: str) -> None:
    if path == "":
        raise NucleiConfigError("path cannot be empty")
    if not is_file(path):
        raise NucleiConfigError(f"{path} is not a file")


def validate_nuclei_config(cfg: NucleiConfig) -> None:
    """Check that enabled template directories exist and options do not conflict."""
    settings = cfg.template_settings
    if settings.default_enabled:
        try:
            _validate_templates_path(cfg.template_paths.default)
        except NucleiConfigError as exc:
            raise NucleiConfigError(f"invalid default template path: {exc}") from exc
    if settings.custom_enabled:
        try:
            _validate_templates_path(cfg.template_paths.custom)
        except NucleiConfigError as exc:
            raise NucleiConfigError(f"invalid custom template path: {exc}") from exc
    if settings.headless_enabled and cfg.custom_scan_options.dom_xss:
        raise HeadlessDomXSSConflict()


def build_nuclei_args(cfg: NucleiConfig) -> list:
    """Return the nuclei command-line arguments for ``cfg``."""
    validate_nuclei_config(cfg)
    settings = cfg.template_settings
    paths = cfg.template_paths
    args = []
    if settings.dast_enabled:
        args += ["-t", "dast"]
        if settings.default_enabled:
            args += ["-t", os.path.join(paths.default, "dast")]
        if settings.custom_enabled:
            args += ["-t", os.path.join(paths.custom, "dast")]
    else:
        if settings.default_enabled:
            args += ["-t", paths.default]
        if settings.custom_enabled:
            args += ["-t", paths.custom]
    if settings.headless_enabled:
        args.append("-headless")
    args += ["-c", str(cfg.threads), "-silent"]
    return args


def _with_dast(cfg: NucleiConfig, enabled: bool) -> NucleiConfig:
    settings = dataclasses.replace(cfg.template_settings, dast_enabled=enabled)
    return dataclasses.replace(cfg, template_settings=settings)


def _scan(urls: Iterable[str], cfg: NucleiConfig) -> list:
    return run_command_with_stdin("nuclei", build_nuclei_args(cfg), urls)


def generic_scan(cfg: NucleiConfig, urls: Iterable[str]) -> list:
    """Scan ``urls`` with the non-DAST templates; ``cfg`` is left unchanged."""
    return _scan(urls, _with_dast(cfg, False))


def dast_scan(cfg: NucleiConfig, urls: Iterable[str]) -> list:
    """Scan ``urls`` with the DAST templates; ``cfg`` is left unchanged."""
    return _scan(urls, _with_dast(cfg, True))


def scan_dom_xss(cfg: NucleiConfig, urls: Iterable[str]) -> list:
    """Scan ``urls`` with the configured DOM XSS template."""
    validate_nuclei_config(cfg)
    template = cfg.custom_scan_templates.dom_xss
    _validate_template_path(template)
    args = ["-t", template, "-dast", "-headless", "-silent"]
    return run_command_with_stdin("nuclei", args, urls)


def insert_reports(db: Database, domain_id: int, reports: list) -> None:
    """Store nuclei reports for a domain in one transaction."""
    if not reports:
        return
    db.exec_bulk_insert(SQL_INSERT_NUCLEI_REPORT, make_args_list(domain_id, reports))


def insert_report(db: Database, domain_id: int, report: str) -> None:
    """Store a single nuclei report for a domain."""
    db.exec_insert(SQL_INSERT_NUCLEI_REPORT, domain_id, report)


def create_nuclei_table(db: Database) -> None:
    """Create the nuclei table if it does not exist."""
    db.exec_stmt(SQL_CREATE_NUCLEI_TABLE)