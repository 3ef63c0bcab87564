"""SQLite implementation of the working store."""

import logging
import sqlite3
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from nutrient_warehouse.errors import StoreError
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)


@dataclass
class SqliteStore(Store):
    """sqlite3-backed store owned by a single pipeline run."""

    connection: sqlite3.Connection

    @classmethod
    def open(cls, database: str | Path = ":memory:") -> "SqliteStore":
        """Open a store on a file path or an in-memory database."""
        _logger.debug("Opening working store %s", database)
        try:
            connection = sqlite3.connect(str(database))
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open working store {database}: {exc}") from exc
        return cls(connection=connection)

    def execute(self, sql: str, params: Sequence[object] = ()) -> None:
        """Run a single statement."""
        try:
            self.connection.execute(sql, params)
        except (sqlite3.Error, OverflowError) as exc:
            raise StoreError(f"{exc} in statement: {_first_line(sql)}") from exc

    def execute_many(self, sql: str, rows: Iterable[Sequence[object]]) -> None:
        """Run a parameterized statement once per row."""
        try:
            self.connection.executemany(sql, rows)
        except (sqlite3.Error, OverflowError) as exc:
            raise StoreError(f"{exc} in statement: {_first_line(sql)}") from exc

    def fetch_rows(
        self, sql: str, params: Sequence[object] = ()
    ) -> list[dict[str, object]]:
        """Return every result row keyed by column name."""
        try:
            cursor = self.connection.execute(sql, params)
        except (sqlite3.Error, OverflowError) as exc:
            raise StoreError(f"{exc} in statement: {_first_line(sql)}") from exc
        names = [column[0] for column in cursor.description or ()]
        return [dict(zip(names, row, strict=True)) for row in cursor.fetchall()]

    def fetch_value(self, sql: str, params: Sequence[object] = ()) -> object:
        """Return the first column of the first result row."""
        try:
            row = self.connection.execute(sql, params).fetchone()
        except (sqlite3.Error, OverflowError) as exc:
            raise StoreError(f"{exc} in statement: {_first_line(sql)}") from exc
        if row is None:
            return None
        return row[0]

    def table_names(self) -> list[str]:
        """Return the names of all tables in the store."""
        rows = self.fetch_rows(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        return [str(row["name"]) for row in rows]

    def commit(self) -> None:
        """Commit pending changes."""
        self.connection.commit()

    def backup(
        self,
        target: Path,
        *,
        pages: int,
        progress: Callable[[int, int], None] | None = None,
    ) -> None:
        """Copy the store page by page into a database file."""

        def _on_step(_status: int, remaining: int, total: int) -> None:
            if progress is not None:
                progress(remaining, total)

        destination = sqlite3.connect(str(target))
        try:
            self.connection.backup(destination, pages=pages, progress=_on_step)
        except sqlite3.Error as exc:
            raise StoreError(f"backup to {target} failed: {exc}") from exc
        finally:
            destination.close()

    def close(self) -> None:
        """Close the sqlite connection."""
        self.connection.close()


def _first_line(sql: str) -> str:
    return sql.strip().splitlines()[0] if sql.strip() else sql
