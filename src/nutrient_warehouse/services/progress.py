"""Progress reporting interface for long-running stages."""

from dataclasses import dataclass
from typing import Protocol


class ProgressReporter(Protocol):
    """Receives incremental progress for loads and the snapshot copy."""

    def rows_loaded(self, table: str, count: int) -> None:
        """Report rows decoded and inserted so far."""

    def load_finished(self, table: str, count: int) -> None:
        """Report the final row count of a load."""

    def pages_copied(self, fraction: float) -> None:
        """Report the fraction of pages copied to the snapshot."""

    def close(self) -> None:
        """Release any terminal resources."""


@dataclass
class SilentProgress(ProgressReporter):
    """Progress reporter that discards everything."""

    def rows_loaded(self, table: str, count: int) -> None:
        return None

    def load_finished(self, table: str, count: int) -> None:
        return None

    def pages_copied(self, fraction: float) -> None:
        return None

    def close(self) -> None:
        return None
