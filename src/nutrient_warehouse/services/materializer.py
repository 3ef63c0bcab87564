"""Mapping of strict-join rows into final product documents."""

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter

from nutrient_warehouse.domain.products import (
    FinalProduct,
    Macros,
    ServingAmount,
    ServingSize,
)
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)

FINAL_TABLE = "final_products"

_PRODUCTS_ADAPTER = TypeAdapter(list[FinalProduct])


@dataclass
class OutputMaterializer:
    """Reads the strict-join table and serializes it as JSON."""

    table: str = FINAL_TABLE
    indent: int | None = 2

    def materialize(self, store: Store) -> list[FinalProduct]:
        """Return one FinalProduct per row, in the table's row order."""
        rows = store.fetch_rows(f"SELECT * FROM {self.table} ORDER BY rowid")
        return [_parse_product(row) for row in rows]

    def dumps(self, products: list[FinalProduct]) -> bytes:
        """Serialize products as a JSON array."""
        return _PRODUCTS_ADAPTER.dump_json(products, indent=self.indent)

    def write(self, products: list[FinalProduct], path: Path) -> Path:
        """Write the JSON document, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.dumps(products))
        _logger.info("Wrote %s products to %s", len(products), path)
        return path


def _parse_product(row: dict[str, object]) -> FinalProduct:
    """Parse a strict-join row into a domain model."""
    return FinalProduct(
        id=int(row["food_id"]),
        name=str(row.get("name") or ""),
        manufacturer=str(row.get("manufacturer") or ""),
        macros=Macros(
            calories=_number(row.get("calories")),
            carbs=_number(row.get("carbs")),
            fat=_number(row.get("fat")),
            protein=_number(row.get("protein")),
        ),
        serving=ServingSize(
            raw=ServingAmount(
                value=_number(row.get("serving_value")),
                units=str(row.get("serving_unit") or ""),
            ),
            household=ServingAmount(
                value=_number(row.get("household_value")),
                units=str(row.get("household_unit") or ""),
            ),
        ),
    )


def _number(value: object) -> float:
    if value is None:
        return 0.0
    return float(value)
