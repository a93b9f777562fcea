"""Running the enabled crawlers and storing the combined URLs."""

import logging
from typing import Sequence

from spike import gau, katana
from spike.config import CrawlerConfig
from spike.db import Database, make_args_list
from spike.utils import CommandError

logger = logging.getLogger(__name__)

SQL_CREATE_CRAWLER_TABLE = """
CREATE TABLE IF NOT EXISTS crawler (
	id INTEGER PRIMARY KEY AUTOINCREMENT,
	domain_id INTEGER NOT NULL,
	url TEXT NOT NULL,
	FOREIGN KEY (domain_id) REFERENCES domains(id) ON DELETE CASCADE
);
"""

SQL_INSERT_URL = "INSERT INTO crawler (domain_id, url) VALUES (?, ?);"


class CrawlerError(Exception):
    """Raised when crawling is misconfigured or a crawler fails."""


def validate_crawler_config(cfg: CrawlerConfig) -> None:
    """Require at least one crawler to be enabled."""
    if not cfg.katana.enabled and not cfg.gau.enabled:
        raise CrawlerError("at least one crawler must be enabled")


def run_crawlers(cfg: CrawlerConfig, live_hosts: Sequence[str], root_domain: str) -> list:
    """Run katana on ``live_hosts`` and gau on ``root_domain``, as enabled."""
    try:
        validate_crawler_config(cfg)
    except CrawlerError as exc:
        raise CrawlerError(f"invalid crawler config: {exc}") from exc

    crawled = []
    if cfg.katana.enabled:
        logger.info("Running katana on %d live hosts", len(live_hosts))
        try:
            crawled += katana.crawl_hosts(live_hosts, cfg.katana)
        except CommandError as exc:
            raise CrawlerError(f"failed to run katana: {exc}") from exc

    if cfg.gau.enabled:
        logger.info("Running gau on root domain: %s", root_domain)
        try:
            crawled += gau.get_all_urls(root_domain, cfg.gau.threads)
        except CommandError as exc:
            raise CrawlerError(f"failed to run gau: {exc}") from exc

    return crawled


def insert_urls(db: Database, domain_id: int, urls: list) -> None:
    """Store crawled URLs for a domain in one transaction."""
    if not urls:
        return
    db.exec_bulk_insert(SQL_INSERT_URL, make_args_list(domain_id, urls))


def insert_url(db: Database, domain_id: int, url: str) -> None:
    """Store a single crawled URL for a domain."""
    db.exec_insert(SQL_INSERT_URL, domain_id, url)


def create_crawler_table(db: Database) -> None:
    """Create the crawler table if it does not exist."""
    db.exec_stmt(SQL_CREATE_CRAWLER_TABLE)