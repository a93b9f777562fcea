"""Known-URL collection with gau and storage of the results."""

from spike.db import Database, make_args_list
from spike.utils import run_command

SQL_CREATE_GAU_TABLE = """
CREATE TABLE IF NOT EXISTS gau (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	url TEXT NOT NULL,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_GAU_URL = "INSERT INTO gau (domain_id, url) VALUES (?, ?);"


def get_all_urls(domain: str, threads: int) -> list:
    """Return the URLs gau knows for ``domain`` and its subdomains."""
    return run_command("gau", [domain, "--subs", "--threads", str(threads)])


def insert_urls(db: Database, domain_id: int, urls: list) -> None:
    """Store gau URLs for a domain in one transaction."""
    if not urls:
        return
    db.exec_bulk_insert(SQL_INSERT_GAU_URL, make_args_list(domain_id, urls))


def insert_url(db: Database, domain_id: int, url: str) -> None:
    """Store a single gau URL for a domain."""
    db.exec_insert(SQL_INSERT_GAU_URL, domain_id, url)


def create_gau_table(db: Database) -> None:
    """Create the gau table if it does not exist."""
    db.exec_stmt(SQL_CREATE_GAU_TABLE)