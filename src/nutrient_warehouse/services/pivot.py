"""Pivot of the macro nutrient codes into per-code side tables."""

import logging
from dataclasses import dataclass

from nutrient_warehouse.domain.products import MacroNutrient
from nutrient_warehouse.errors import ConsistencyError
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)

COMBINED_TABLE = "macros"

_UNIVERSE_SQL = "SELECT DISTINCT id AS food_id FROM products"


def pivot_table(macro: MacroNutrient) -> str:
    """Return the scratch table name holding one macro."""
    return f"pivot_{macro.column}"


SCRATCH_TABLES = (*(pivot_table(macro) for macro in MacroNutrient), COMBINED_TABLE)


@dataclass
class NutrientPivot:
    """Builds one (food_id, value) table per macro nutrient code.

    Every product id gets exactly one row in every pivot. Ids without a
    measurement for a code get 0, and duplicate measurements collapse to the
    largest value.
    """

    def build(self, store: Store) -> int:
        """Create the four pivot tables and return the food id universe size."""
        for macro in MacroNutrient:
            table = pivot_table(macro)
            store.execute(f"DROP TABLE IF EXISTS {table}")
            store.execute(
                f"CREATE TABLE {table} ("
                "food_id INTEGER NOT NULL PRIMARY KEY, value REAL NOT NULL)"
            )
            store.execute(
                f"""
                INSERT INTO {table} (food_id, value)
                SELECT universe.food_id, COALESCE(measured.value, 0)
                FROM ({_UNIVERSE_SQL}) AS universe
                LEFT JOIN (
                    SELECT food_id, MAX(value) AS value
                    FROM nutrients
                    WHERE nutrient_code = ?
                    GROUP BY food_id
                ) AS measured ON measured.food_id = universe.food_id
                """,
                (macro.value,),
            )
            _logger.debug("Pivoted nutrient %s into %s", macro.value, table)
        store.commit()
        universe = self.universe_size(store)
        _logger.info(
            "Pivoted %s macro codes over %s food ids", len(MacroNutrient), universe
        )
        return universe

    @staticmethod
    def universe_size(store: Store) -> int:
        """Return the number of distinct product food ids."""
        return int(store.fetch_value(f"SELECT COUNT(*) FROM ({_UNIVERSE_SQL})") or 0)

    def verify_coverage(
        self, store: Store, combined_table: str = COMBINED_TABLE
    ) -> int:
        """Check the fully joined pivots have one row per food id.

        Raises ConsistencyError when the counts differ.
        """
        universe = self.universe_size(store)
        combined = int(store.fetch_value(f"SELECT COUNT(*) FROM {combined_table}") or 0)
        if universe != combined:
            raise ConsistencyError(
                f"pivot coverage mismatch: {universe} food ids but "
                f"{combined} rows in {combined_table}"
            )
        _logger.info("Pivot coverage verified for %s food ids", universe)
        return combined

    @staticmethod
    def drop_scratch(store: Store) -> None:
        """Drop every pivot and intermediate table."""
        for table in SCRATCH_TABLES:
            store.execute(f"DROP TABLE IF EXISTS {table}")
        store.commit()
        _logger.info("Dropped scratch tables: %s", ", ".join(SCRATCH_TABLES))
