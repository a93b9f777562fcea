"""Thin SQLite access layer with transactional bulk inserts."""

import sqlite3
from typing import Any, Iterable, Optional, Sequence


class Database:
    """A SQLite connection with foreign keys enforced."""

    def __init__(self) -> None:
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("database is not connected")
        return self._conn

    def connect(self, db_path) -> None:
        """Open the database at ``db_path`` and enable foreign keys."""
        self._conn = sqlite3.connect(db_path, isolation_level=None)
        self.exec_stmt("PRAGMA foreign_keys = ON;")

    def close(self) -> None:
        """Close the connection."""
        self.connection.close()
        self._conn = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info) -> None:
        if self._conn is not None:
            self.close()

    def exec_bulk_insert(self, query: str, args_list: Iterable[Sequence[Any]]) -> None:
        """Run ``query`` once per row of arguments inside one transaction."""
        conn = self.connection
        conn.execute("BEGIN")
        try:
            conn.executemany(query, args_list)
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def exec_insert(self, query: str, *args: Any) -> None:
        """Execute ``query`` with ``args``, discarding any rows."""
        self.connection.execute(query, args)

    def exec_stmt(self, stmt: str) -> None:
        """Execute a statement that takes no arguments."""
        self.connection.execute(stmt)

    def query(self, query: str, *args: Any) -> list:
        """Execute ``query`` and return all resulting rows."""
        return self.connection.execute(query, args).fetchall()


def make_args_list(prefix: Any, values: Iterable[str]) -> list:
    """Pair ``prefix`` with each value, giving rows for a bulk insert."""
    return [(prefix, value) for value in values]