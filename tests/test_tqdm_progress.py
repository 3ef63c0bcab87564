"""Tests for the tqdm progress reporter."""

from nutrient_warehouse.adapters.tqdm_progress import TqdmProgressReporter


def test_row_bars_track_counts_and_close() -> None:
    reporter = TqdmProgressReporter()

    reporter.rows_loaded("nutrients", 1_000_000)
    assert reporter.bars["nutrients"].n == 1_000_000

    reporter.load_finished("nutrients", 1_500_000)
    assert "nutrients" not in reporter.bars


def test_snapshot_bar_closes_when_complete() -> None:
    reporter = TqdmProgressReporter()

    reporter.pages_copied(0.5)
    assert reporter.snapshot_bar is not None
    assert reporter.snapshot_bar.n == 50

    reporter.pages_copied(1.0)
    assert reporter.snapshot_bar is None
    reporter.close()
