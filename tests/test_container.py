"""Tests for container wiring."""

from nutrient_warehouse.adapters.tqdm_progress import TqdmProgressReporter
from nutrient_warehouse.containers import build_container
from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.services.progress import SilentProgress


def test_build_container_wires_settings(settings) -> None:
    container = build_container(settings, show_progress=False)

    pipeline = container.pipeline
    assert isinstance(container.progress, SilentProgress)
    serving_path = pipeline.sources[RecordKind.SERVING]
    assert serving_path == settings.data_dir / "Serving_size.csv"
    assert pipeline.loader.progress_every == settings.load_progress_every
    assert pipeline.snapshotter.pages_per_step == settings.snapshot_pages_per_step
    assert container.store.table_names() == []
    container.close_resources()


def test_build_container_uses_tqdm_by_default(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.progress, TqdmProgressReporter)
    assert container.pipeline.loader.progress is container.progress
    container.close_resources()
