"""Web crawling with katana and storage of the results."""

from typing import Iterable

from spike.config import KatanaConfig
from spike.db import Database, make_args_list
from spike.utils import run_command_with_stdin

SQL_CREATE_KATANA_TABLE = """
CREATE TABLE IF NOT EXISTS katana (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	url TEXT NOT NULL,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_KATANA_URL = "INSERT INTO katana (domain_id, url) VALUES (?, ?);"


def build_katana_args(cfg: KatanaConfig) -> list:
    """Return the katana command-line arguments for ``cfg``."""
    args = [
        "-silent", "-jc", "-kf", "-fx", "-xhr", "-jsl", "-aff",
        "-c", str(cfg.threads),
        "-p", str(cfg.parallelism_threads),
        "-d", str(cfg.crawl_depth),
        "-ct", cfg.max_crawl_time,
    ]
    if cfg.headless:
        args.append("-headless")
    if cfg.no_sandbox:
        args.append("-no-sandbox")
    return args


def crawl_hosts(live_hosts: Iterable[str], cfg: KatanaConfig) -> list:
    """Crawl ``live_hosts`` with katana and return the URLs found."""
    return run_command_with_stdin("katana", build_katana_args(cfg), live_hosts)


def insert_urls(db: Database, domain_id: int, urls: list) -> None:
    """Store katana URLs for a domain in one transaction."""
    if not urls:
        return
    db.exec_bulk_insert(SQL_INSERT_KATANA_URL, make_args_list(domain_id, urls))


def insert_url(db: Database, domain_id: int, url: str) -> None:
    """Store a single katana URL for a domain."""
    db.exec_insert(SQL_INSERT_KATANA_URL, domain_id, url)


def create_katana_table(db: Database) -> None:
    """Create the katana table if it does not exist."""
    db.exec_stmt(SQL_CREATE_KATANA_TABLE)