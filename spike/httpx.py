"""Live host probing and storage of probe results."""

from typing import Iterable

from spike.db import Database, make_args_list
from spike.utils import run_command_with_stdin

SQL_CREATE_LIVE_HOSTS_TABLE = """
CREATE TABLE IF NOT EXISTS live_hosts (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	live_host TEXT NOT NULL,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_LIVE_HOST = "INSERT INTO live_hosts (domain_id, live_host) VALUES (?, ?);"


def probe(hosts: Iterable[str], threads: int) -> list:
    """Probe ``hosts`` with httpx and return the live ones it reports."""
    return run_command_with_stdin("httpx", ["-s", "-t", str(threads)], hosts)


def insert_live_hosts(db: Database, domain_id: int, live_hosts: list) -> None:
    """Store live hosts for a domain in one transaction."""
    if not live_hosts:
        return
    db.exec_bulk_insert(SQL_INSERT_LIVE_HOST, make_args_list(domain_id, live_hosts))


def insert_live_host(db: Database, domain_id: int, live_host: str) -> None:
    """Store a single live host for a domain."""
    db.exec_insert(SQL_INSERT_LIVE_HOST, domain_id, live_host)


def create_live_hosts_table(db: Database) -> None:
    """Create the live_hosts table if it does not exist."""
    db.exec_stmt(SQL_CREATE_LIVE_HOSTS_TABLE)