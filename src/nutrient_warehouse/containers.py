"""Dependency container wiring for the pipeline."""

from collections.abc import Callable
from dataclasses import dataclass

from nutrient_warehouse.adapters.csv_source import read_records
from nutrient_warehouse.adapters.sqlite_store import SqliteStore
from nutrient_warehouse.adapters.tqdm_progress import TqdmProgressReporter
from nutrient_warehouse.config import Settings
from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.services.loader import BulkLoader
from nutrient_warehouse.services.pipeline import PipelineService
from nutrient_warehouse.services.progress import ProgressReporter, SilentProgress
from nutrient_warehouse.services.snapshot import SnapshotService


@dataclass
class PipelineContainer:
    """Holds the store and services for one pipeline run."""

    settings: Settings
    store: SqliteStore
    progress: ProgressReporter
    pipeline: PipelineService
    close_resources: Callable[[], None]


def build_container(
    settings: Settings | None = None, *, show_progress: bool = True
) -> PipelineContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = SqliteStore.open(resolved_settings.working_database)
    progress: ProgressReporter = (
        TqdmProgressReporter() if show_progress else SilentProgress()
    )
    pipeline = PipelineService(
        reader=read_records,
        sources={kind: resolved_settings.source_path(kind) for kind in RecordKind},
        loader=BulkLoader(
            batch_size=resolved_settings.load_batch_size,
            progress_every=resolved_settings.load_progress_every,
            progress=progress,
        ),
        snapshotter=SnapshotService(
            pages_per_step=resolved_settings.snapshot_pages_per_step,
            progress=progress,
        ),
    )

    def close_resources() -> None:
        progress.close()
        store.close()

    return PipelineContainer(
        settings=resolved_settings,
        store=store,
        progress=progress,
        pipeline=pipeline,
        close_resources=close_resources,
    )
