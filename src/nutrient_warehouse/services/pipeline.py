"""End-to-end pipeline: CSV sources to JSON output and snapshot."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.domain.records import SourceRecord
from nutrient_warehouse.services.join import (
    FULL_JOIN,
    STRICT_JOIN,
    DenormalizationJoin,
)
from nutrient_warehouse.services.loader import BulkLoader
from nutrient_warehouse.services.materializer import FINAL_TABLE, OutputMaterializer
from nutrient_warehouse.services.pivot import COMBINED_TABLE, NutrientPivot
from nutrient_warehouse.services.snapshot import SnapshotService
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)

RecordReader = Callable[[Path, RecordKind], Iterable[SourceRecord]]


@dataclass
class PipelineResult:
    """Counts and artifacts of one pipeline run."""

    loaded: dict[str, int]
    food_ids: int
    final_products: int
    output_path: Path
    snapshot_path: Path | None


@dataclass
class PipelineService:
    """Runs every stage once, in order, against one store."""

    reader: RecordReader
    sources: dict[RecordKind, Path]
    loader: BulkLoader = field(default_factory=BulkLoader)
    pivot: NutrientPivot = field(default_factory=NutrientPivot)
    joiner: DenormalizationJoin = field(default_factory=DenormalizationJoin)
    materializer: OutputMaterializer = field(default_factory=OutputMaterializer)
    snapshotter: SnapshotService = field(default_factory=SnapshotService)

    def load_sources(self, store: Store) -> dict[str, int]:
        """Load every record kind and return row counts by table."""
        loaded: dict[str, int] = {}
        for kind in RecordKind:
            path = self.sources[kind]
            loaded[kind.table] = self.loader.load(store, kind, self.reader(path, kind))
        return loaded

    def run(
        self, store: Store, output_path: Path, snapshot_path: Path | None = None
    ) -> PipelineResult:
        """Run the whole pipeline; any error aborts the run."""
        loaded = self.load_sources(store)

        food_ids = self.pivot.build(store)
        self.joiner.join(store, FULL_JOIN, into=COMBINED_TABLE)
        self.pivot.verify_coverage(store, COMBINED_TABLE)
        final_count = self.joiner.join(store, STRICT_JOIN, into=FINAL_TABLE)
        self.pivot.drop_scratch(store)

        _logger.info(
            "Reconciled %s food ids: %s usable, %s excluded by the strict join",
            food_ids,
            final_count,
            food_ids - final_count,
        )
        products = self.materializer.materialize(store)
        self.materializer.write(products, output_path)

        if snapshot_path is not None:
            self.snapshotter.persist(store, snapshot_path)

        return PipelineResult(
            loaded=loaded,
            food_ids=food_ids,
            final_products=len(products),
            output_path=output_path,
            snapshot_path=snapshot_path,
        )
