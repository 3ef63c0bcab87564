"""Durable page-by-page copy of the working store."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from nutrient_warehouse.errors import SnapshotError, StoreError
from nutrient_warehouse.services.pivot import SCRATCH_TABLES
from nutrient_warehouse.services.progress import ProgressReporter, SilentProgress
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)


@dataclass
class SnapshotService:
    """Copies the working store into a single database file.

    An interrupted copy leaves an invalid file behind; callers should
    discard it.
    """

    pages_per_step: int = 250
    progress: ProgressReporter = field(default_factory=SilentProgress)

    def persist(self, store: Store, target: Path) -> Path:
        """Copy the store to target, replacing any previous snapshot."""
        leftovers = sorted(set(store.table_names()) & set(SCRATCH_TABLES))
        if leftovers:
            raise SnapshotError(
                f"scratch tables still present: {', '.join(leftovers)}"
            )
        store.commit()
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists():
            _logger.info("Replacing existing snapshot %s", target)
            target.unlink()

        def _report(remaining: int, total: int) -> None:
            fraction = (total - remaining) / total if total else 1.0
            self.progress.pages_copied(fraction)

        try:
            store.backup(target, pages=self.pages_per_step, progress=_report)
        except StoreError as exc:
            raise SnapshotError(f"snapshot to {target} failed: {exc}") from exc
        _logger.info("Snapshot written to %s", target)
        return target
