"""Tests for the command line entry point."""

import json

from nutrient_warehouse.cli import main
from tests.conftest import SourceData, product_row


def _args(settings) -> list[str]:
    return [
        "--data-dir",
        str(settings.data_dir),
        "--output",
        str(settings.output_path),
        "--snapshot",
        str(settings.snapshot_path),
        "--no-progress",
    ]


def test_main_runs_pipeline(settings, bar_data) -> None:
    bar_data.write(settings)

    exit_code = main(_args(settings))

    assert exit_code == 0
    products = json.loads(settings.output_path.read_text())
    assert [item["id"] for item in products] == [100]
    assert settings.snapshot_path.exists()


def test_main_reports_missing_sources(settings) -> None:
    exit_code = main(_args(settings))

    assert exit_code == 1
    assert not settings.output_path.exists()


def test_main_reports_decoding_errors(settings) -> None:
    data = SourceData()
    data.add_product(1)
    data.nutrients.append([1, 208, "Energy", "LCCS", "plenty", "KCAL"])
    data.write(settings)

    assert main(_args(settings)) == 1


def test_main_accepts_file_backed_working_store(
    settings, bar_data, tmp_path
) -> None:
    bar_data.write(settings)
    working = tmp_path / "working.sqlite"

    exit_code = main([*_args(settings), "--database", str(working)])

    assert exit_code == 0
    assert working.exists()


def test_main_reports_out_of_range_ids(settings, bar_data) -> None:
    bar_data.products.append(product_row(10**20))
    bar_data.write(settings)

    assert main(_args(settings)) == 1
    assert not settings.output_path.exists()


def test_main_reports_unopenable_working_store(
    settings, bar_data, tmp_path
) -> None:
    bar_data.write(settings)
    working = tmp_path / "missing" / "working.sqlite"

    assert main([*_args(settings), "--database", str(working)]) == 1


def test_main_reports_invalid_environment(settings, monkeypatch) -> None:
    monkeypatch.setenv("NUTR_LOAD_BATCH_SIZE", "many")

    assert main(_args(settings)) == 1
