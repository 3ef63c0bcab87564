"""Command line entry point for the nutrient warehouse pipeline."""

import argparse
import logging
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from nutrient_warehouse.app_logging import configure_logging
from nutrient_warehouse.config import Settings
from nutrient_warehouse.containers import build_container
from nutrient_warehouse.errors import PipelineError

_logger = logging.getLogger("nutrient_warehouse.cli")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load USDA nutrient CSV extracts and build final products"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory containing the four CSV extracts",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Path of the final products JSON document",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="SQLite file receiving the durable snapshot",
    )
    parser.add_argument(
        "--database",
        help="Working database (defaults to an in-memory store)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable terminal progress bars",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details",
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.output is not None:
        overrides["output_path"] = args.output
    if args.snapshot is not None:
        overrides["snapshot_path"] = args.snapshot
    if args.database is not None:
        overrides["working_database"] = args.database
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline once and return the process exit code."""
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    start = time.time()
    try:
        settings = _settings_from_args(args)
        container = build_container(settings, show_progress=not args.no_progress)
    except (PipelineError, ValidationError) as exc:
        _logger.error("Pipeline failed: %s: %s", type(exc).__name__, exc)
        return 1

    try:
        result = container.pipeline.run(
            container.store,
            output_path=settings.output_path,
            snapshot_path=settings.snapshot_path,
        )
    except (PipelineError, OSError) as exc:
        _logger.error("Pipeline failed: %s: %s", type(exc).__name__, exc)
        return 1
    finally:
        container.close_resources()

    _logger.info(
        "Pipeline finished in %.1f seconds: %s final products from %s food ids",
        time.time() - start,
        result.final_products,
        result.food_ids,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
