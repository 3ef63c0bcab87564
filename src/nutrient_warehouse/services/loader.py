"""Bulk loading of decoded records into the working store."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import islice

from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.domain.records import SourceRecord
from nutrient_warehouse.errors import SchemaError, StoreError
from nutrient_warehouse.services.progress import ProgressReporter, SilentProgress
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)


@dataclass
class BulkLoader:
    """Creates a table per record kind and streams records into it."""

    batch_size: int = 10_000
    progress_every: int = 1_000_000
    progress: ProgressReporter = field(default_factory=SilentProgress)

    def create_table(self, store: Store, kind: RecordKind) -> None:
        """Create the table for a record kind, replacing any previous one."""
        schema = kind.value.schema
        try:
            store.execute(f"DROP TABLE IF EXISTS {schema.table}")
            store.execute(schema.create_sql())
        except StoreError as exc:
            raise SchemaError(f"cannot create table {schema.table}: {exc}") from exc

    def load(
        self, store: Store, kind: RecordKind, records: Iterable[SourceRecord]
    ) -> int:
        """Insert every record in source order and return the row count.

        The sequence is consumed in batches and never held in memory as a
        whole. A failure leaves the rows inserted so far in place.
        """
        binding = kind.value
        schema = binding.schema
        insert_sql = schema.insert_sql()
        _logger.info("Loading %s", schema.table)
        self.create_table(store, kind)

        count = 0
        for batch in _batched(iter(records), self.batch_size):
            rows = [binding.to_row(record) for record in batch]
            try:
                store.execute_many(insert_sql, rows)
            except StoreError as exc:
                raise SchemaError(
                    f"insert into {schema.table} failed after {count} rows: {exc}"
                ) from exc
            previous = count
            count += len(rows)
            if count // self.progress_every > previous // self.progress_every:
                _logger.info("%s: %s rows loaded", schema.table, count)
                self.progress.rows_loaded(schema.table, count)

        try:
            for statement in schema.index_sql():
                store.execute(statement)
        except StoreError as exc:
            raise SchemaError(f"cannot index {schema.table}: {exc}") from exc
        store.commit()
        self.progress.load_finished(schema.table, count)
        _logger.info("Loaded %s rows into %s", count, schema.table)
        return count


def _batched(items: Iterator[SourceRecord], size: int) -> Iterator[list[SourceRecord]]:
    """Yield consecutive lists of at most size items."""
    while True:
        batch = list(islice(items, size))
        if not batch:
            return
        yield batch
