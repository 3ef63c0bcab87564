"""Denormalizing join of products, servings and macro pivots."""

import logging
from dataclasses import dataclass

from nutrient_warehouse.domain.products import MacroNutrient
from nutrient_warehouse.services.pivot import pivot_table
from nutrient_warehouse.services.store import Store

_logger = logging.getLogger(__name__)

_BASE = MacroNutrient.CALORIES.column

_MACRO_COLUMNS = tuple(
    f"{macro.column}.value AS {macro.column}" for macro in MacroNutrient
)


@dataclass(frozen=True)
class JoinPolicy:
    """Which columns, extra joins and inclusion predicate a join uses."""

    name: str
    columns: tuple[str, ...]
    joins: tuple[str, ...] = ()
    predicate: str = "1 = 1"


FULL_JOIN = JoinPolicy(
    name="full",
    columns=(f"{_BASE}.food_id AS food_id", *_MACRO_COLUMNS),
)

STRICT_JOIN = JoinPolicy(
    name="strict",
    columns=(
        f"{_BASE}.food_id AS food_id",
        "product.name AS name",
        "product.manufacturer AS manufacturer",
        *_MACRO_COLUMNS,
        "serving.value AS serving_value",
        "serving.unit AS serving_unit",
        "serving.household_value AS household_value",
        "serving.household_unit AS household_unit",
    ),
    joins=(
        "JOIN products AS product ON product.rowid = ("
        "SELECT MIN(rowid) FROM products AS candidate "
        f"WHERE candidate.id = {_BASE}.food_id)",
        "JOIN serving AS serving ON serving.rowid = ("
        "SELECT MIN(rowid) FROM serving AS candidate "
        f"WHERE candidate.food_id = {_BASE}.food_id "
        "AND (candidate.value IS NOT NULL "
        "OR candidate.household_value IS NOT NULL))",
    ),
    predicate=" AND ".join(
        (
            "(serving.value IS NOT NULL OR serving.household_value IS NOT NULL)",
            *(f"{macro.column}.value > 0" for macro in MacroNutrient),
        )
    ),
)


def join_sql(policy: JoinPolicy) -> str:
    """Build the SELECT for a policy over the four macro pivots."""
    pivot_joins = [
        f"JOIN {pivot_table(macro)} AS {macro.column} "
        f"ON {macro.column}.food_id = {_BASE}.food_id"
        for macro in MacroNutrient
        if macro is not MacroNutrient.CALORIES
    ]
    lines = [
        "SELECT " + ",\n       ".join(policy.columns),
        f"FROM {pivot_table(MacroNutrient.CALORIES)} AS {_BASE}",
        *pivot_joins,
        *policy.joins,
        f"WHERE {policy.predicate}",
        f"ORDER BY {_BASE}.food_id",
    ]
    return "\n".join(lines)


@dataclass
class DenormalizationJoin:
    """Materializes a join policy into a table."""

    def join(self, store: Store, policy: JoinPolicy, into: str) -> int:
        """Replace table into with the policy's rows and return their count."""
        store.execute(f"DROP TABLE IF EXISTS {into}")
        store.execute(f"CREATE TABLE {into} AS\n{join_sql(policy)}")
        store.commit()
        count = int(store.fetch_value(f"SELECT COUNT(*) FROM {into}") or 0)
        _logger.info("%s join produced %s rows in %s", policy.name, count, into)
        return count
