"""Relational store interface used by every pipeline stage."""

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Protocol


class Store(Protocol):
    """Exclusively owned session against the working relational store."""

    def execute(self, sql: str, params: Sequence[object] = ()) -> None:
        """Run a single statement."""

    def execute_many(self, sql: str, rows: Iterable[Sequence[object]]) -> None:
        """Run a parameterized statement once per row."""

    def fetch_rows(
        self, sql: str, params: Sequence[object] = ()
    ) -> list[dict[str, object]]:
        """Return every result row keyed by column name."""

    def fetch_value(self, sql: str, params: Sequence[object] = ()) -> object:
        """Return the first column of the first result row."""

    def table_names(self) -> list[str]:
        """Return the names of all tables in the store."""

    def commit(self) -> None:
        """Commit pending changes."""

    def backup(
        self,
        target: Path,
        *,
        pages: int,
        progress: Callable[[int, int], None] | None = None,
    ) -> None:
        """Copy the store to a file, reporting (remaining, total) pages."""

    def close(self) -> None:
        """Release the underlying connection."""
