"""Storage layout for each record kind.

Create and insert statements are both generated from the same column tuple,
so their column order always agrees.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from nutrient_warehouse.domain.records import (
    DerivationRecord,
    NutrientRecord,
    ProductRecord,
    ServingRecord,
    SourceRecord,
)


@dataclass(frozen=True)
class Column:
    """A column declaration."""

    name: str
    sql_type: str
    nullable: bool = False

    def ddl(self) -> str:
        """Return the column definition used in CREATE TABLE."""
        constraint = "" if self.nullable else " NOT NULL"
        return f"{self.name} {self.sql_type}{constraint}"


@dataclass(frozen=True)
class TableSchema:
    """Declarative table definition."""

    table: str
    columns: tuple[Column, ...]
    indexes: tuple[tuple[str, ...], ...] = ()

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    def create_sql(self) -> str:
        """Return the CREATE TABLE statement."""
        body = ",\n    ".join(column.ddl() for column in self.columns)
        return f"CREATE TABLE {self.table} (\n    {body}\n)"

    def insert_sql(self) -> str:
        """Return the parameterized INSERT statement in column order."""
        names = ", ".join(self.column_names)
        placeholders = ", ".join("?" for _ in self.columns)
        return f"INSERT INTO {self.table} ({names}) VALUES ({placeholders})"

    def index_sql(self) -> list[str]:
        """Return CREATE INDEX statements for the declared lookups."""
        return [
            f"CREATE INDEX idx_{self.table}_{'_'.join(columns)} "
            f"ON {self.table} ({', '.join(columns)})"
            for columns in self.indexes
        ]


@dataclass(frozen=True)
class RecordBinding:
    """Pairs a record model with its table and insert mapping."""

    model: type[SourceRecord]
    schema: TableSchema
    to_row: Callable[[SourceRecord], tuple[object, ...]]


NUTRIENTS = TableSchema(
    table="nutrients",
    columns=(
        Column("food_id", "INTEGER"),
        Column("nutrient_code", "INTEGER"),
        Column("name", "TEXT"),
        Column("derivation_code", "TEXT"),
        Column("value", "REAL"),
        Column("unit", "TEXT"),
    ),
    indexes=(("nutrient_code", "food_id"),),
)

PRODUCTS = TableSchema(
    table="products",
    columns=(
        Column("id", "INTEGER"),
        Column("name", "TEXT"),
        Column("source", "TEXT", nullable=True),
        Column("upc", "TEXT", nullable=True),
        Column("manufacturer", "TEXT", nullable=True),
        Column("modified", "TEXT", nullable=True),
        Column("available", "TEXT", nullable=True),
        Column("ingredients", "TEXT", nullable=True),
    ),
    indexes=(("id",),),
)

SERVING = TableSchema(
    table="serving",
    columns=(
        Column("food_id", "INTEGER"),
        Column("value", "REAL", nullable=True),
        Column("unit", "TEXT", nullable=True),
        Column("household_value", "REAL", nullable=True),
        Column("household_unit", "TEXT", nullable=True),
        Column("prep_state", "TEXT", nullable=True),
    ),
    indexes=(("food_id",),),
)

DERIVATIONS = TableSchema(
    table="derivations",
    columns=(
        Column("code", "TEXT"),
        Column("description", "TEXT", nullable=True),
    ),
)


def _nutrient_row(record: NutrientRecord) -> tuple[object, ...]:
    return (
        record.food_id,
        record.nutrient_code,
        record.name,
        record.derivation_code,
        record.value,
        record.unit,
    )


def _product_row(record: ProductRecord) -> tuple[object, ...]:
    return (
        record.id,
        record.name,
        record.source,
        record.upc,
        record.manufacturer,
        record.modified,
        record.available,
        record.ingredients,
    )


def _serving_row(record: ServingRecord) -> tuple[object, ...]:
    return (
        record.food_id,
        record.value,
        record.unit,
        record.household_value,
        record.household_unit,
        record.prep_state,
    )


def _derivation_row(record: DerivationRecord) -> tuple[object, ...]:
    return (record.code, record.description)


class RecordKind(Enum):
    """The closed set of source record kinds, in load order."""

    NUTRIENT = RecordBinding(NutrientRecord, NUTRIENTS, _nutrient_row)
    PRODUCT = RecordBinding(ProductRecord, PRODUCTS, _product_row)
    SERVING = RecordBinding(ServingRecord, SERVING, _serving_row)
    DERIVATION = RecordBinding(DerivationRecord, DERIVATIONS, _derivation_row)

    @property
    def table(self) -> str:
        return self.value.schema.table
