"""Subdomain enumeration and storage of the results."""

import subprocess

from spike.db import Database, make_args_list
from spike.utils import CommandError, lines_to_list, remove_duplicates_and_empty_strings

SQL_CREATE_SUBDOMAINS_TABLE = """
CREATE TABLE IF NOT EXISTS subdomains (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	subdomain TEXT NOT NULL,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_SUBDOMAIN = "INSERT INTO subdomains (domain_id, subdomain) VALUES (?, ?);"


def get_subdomains(domain: str, threads: int) -> list:
    """Enumerate subdomains of ``domain`` with subfinder; the root domain is included."""
    argv = ["subfinder", "-d", domain, "-silent", "-t", str(threads), "-all"]
    try:
        result = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise CommandError(str(exc)) from exc
    lines = lines_to_list(result.stdout.decode("utf-8", errors="replace"))
    lines.append(domain)
    return remove_duplicates_and_empty_strings(lines)


def push_subdomains_to_db(db: Database, domain_id: int, subdomains: list) -> None:
    """Create the subdomains table if needed and store ``subdomains``."""
    if not subdomains:
        return
    db.exec_stmt(SQL_CREATE_SUBDOMAINS_TABLE)
    db.exec_bulk_insert(SQL_INSERT_SUBDOMAIN, make_args_list(domain_id, subdomains))


def insert_subdomains(db: Database, domain_id: int, subdomains: list) -> None:
    """Store subdomains in an existing table in one transaction."""
    if not subdomains:
        return
    db.exec_bulk_insert(SQL_INSERT_SUBDOMAIN, make_args_list(domain_id, subdomains))