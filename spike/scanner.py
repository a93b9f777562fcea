"""Scan orchestration entry point."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from spike.config import AppConfig, ToolsConfig
from spike.db import Database

logger = logging.getLogger(__name__)


class ScannerError(Exception):
    """Raised when a scanner is not set up correctly."""


@dataclass
class Scanner:
    """Settings for a scan over a set of domains."""

    domains: Optional[list] = None
    save_scan_to_db: bool = False
    log: bool = False
    app_config: AppConfig = field(default_factory=AppConfig)
    tools_config: ToolsConfig = field(default_factory=ToolsConfig)

    def validate(self) -> None:
        """Check the settings, enabling logging when no output is selected."""
        if self.domains is None:
            raise ScannerError("domains cannot be nil")
        if not self.save_scan_to_db and not self.log:
            logger.warning(
                "Neither SaveScanToDB nor Log is enabled. Nothing to do, "
                "enabling Log as a fallback."
            )
            self.log = True

    def scan(self) -> None:
        """Validate the settings and open the scan database if one is wanted."""
        self.validate()
        logger.debug("Starting scan for domains: %s", self.domains)
        if self.save_scan_to_db:
            with Database() as db:
                db.connect(self.app_config.default_db_path)