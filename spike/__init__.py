"""Reconnaissance helpers around subfinder, httpx, katana, gau and nuclei, backed by SQLite."""

__version__ = "0.1.0"