"""Storage of the root domains that scans are run against."""

from dataclasses import dataclass
from typing import Iterable

from spike.db import Database

SQL_CREATE_DOMAINS_TABLE = """
CREATE TABLE IF NOT EXISTS domains (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain TEXT NOT NULL UNIQUE,
	is_scanned BOOLEAN DEFAULT FALSE
);
"""

SQL_INSERT_DOMAIN = "INSERT INTO domains (domain) VALUES (?)"
SQL_UPDATE_DOMAIN_SCANNED = "UPDATE domains SET is_scanned = TRUE WHERE domain = ?"
SQL_SELECT_DOMAINS = "SELECT id, domain, is_scanned FROM domains"


@dataclass(frozen=True)
class DomainRecord:
    """One row of the domains table."""

    id: int
    domain: str
    is_scanned: bool


def select_domains(db: Database) -> list:
    """Return every stored domain."""
    return [
        DomainRecord(id=row_id, domain=domain, is_scanned=bool(is_scanned))
        for row_id, domain, is_scanned in db.query(SQL_SELECT_DOMAINS)
    ]


def update_domain_scanned(db: Database, domain_id) -> None:
    """Mark a domain as scanned; the value is matched against the domain column."""
    db.exec_insert(SQL_UPDATE_DOMAIN_SCANNED, domain_id)


def push_domains_to_db(db: Database, domains: Iterable[str]) -> None:
    """Create the domains table if needed and insert ``domains`` into it."""
    db.exec_stmt(SQL_CREATE_DOMAINS_TABLE)
    insert_domains(db, domains)


def insert_domains(db: Database, domains: Iterable[str]) -> None:
    """Insert several domains in one transaction."""
    db.exec_bulk_insert(SQL_INSERT_DOMAIN, [(domain,) for domain in domains])


def insert_domain(db: Database, domain: str) -> None:
    """Insert a single domain."""
    db.exec_insert(SQL_INSERT_DOMAIN, domain)