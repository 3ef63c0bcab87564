"""Shared test fixtures."""

import csv
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nutrient_warehouse.adapters.csv_source import read_records
from nutrient_warehouse.adapters.sqlite_store import SqliteStore
from nutrient_warehouse.config import Settings
from nutrient_warehouse.domain.catalog import RecordKind
from nutrient_warehouse.services.loader import BulkLoader
from nutrient_warehouse.services.progress import ProgressReporter

NUTRIENT_HEADER = [
    "NDB_No",
    "Nutrient_Code",
    "Nutrient_name",
    "Derivation_Code",
    "Output_value",
    "Output_uom",
]
PRODUCT_HEADER = [
    "NDB_Number",
    "long_name",
    "data_source",
    "gtin_upc",
    "manufacturer",
    "date_modified",
    "date_available",
    "ingredients_english",
]
SERVING_HEADER = [
    "NDB_No",
    "Serving_Size",
    "Serving_Size_UOM",
    "Household_Serving_Size",
    "Household_Serving_Size_UOM",
    "Preparation_State",
]
DERIVATION_HEADER = ["Derivation_Code", "Derivation_Description"]

_MACRO_CODES = {"calories": 208, "carbs": 205, "fat": 204, "protein": 203}
_MACRO_NAMES = {
    208: ("Energy", "KCAL"),
    205: ("Carbohydrate, by difference", "G"),
    204: ("Total lipid (fat)", "G"),
    203: ("Protein", "G"),
}


def write_csv(path: Path, header: list[str], rows: list[list[object]]) -> Path:
    """Write a quoted CSV file with a header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def product_row(
    food_id: int, name: str = "Test Bar", manufacturer: str = "Acme"
) -> list[object]:
    return [
        food_id,
        name,
        "LI",
        "000123456789",
        manufacturer,
        "2017-11-01 19:31:00",
        "2017-11-01 19:31:00",
        "OATS, HONEY",
    ]


def serving_row(  # noqa: PLR0913
    food_id: int,
    value: object = "50.0",
    unit: str = "g",
    household_value: object = "1.0",
    household_unit: str = "bar",
    prep_state: str = "",
) -> list[object]:
    return [food_id, value, unit, household_value, household_unit, prep_state]


def macro_rows(
    food_id: int,
    calories: float | None = 900,
    carbs: float | None = 90,
    fat: float | None = 20,
    protein: float | None = 10,
) -> list[list[object]]:
    """Nutrient rows for the four macros; None leaves a macro unmeasured."""
    values = {"calories": calories, "carbs": carbs, "fat": fat, "protein": protein}
    rows = []
    for key, value in values.items():
        if value is None:
            continue
        code = _MACRO_CODES[key]
        name, unit = _MACRO_NAMES[code]
        rows.append([food_id, code, name, "LCCS", value, unit])
    return rows


@dataclass
class SourceData:
    """Rows for the four CSV extracts."""

    nutrients: list[list[object]] = field(default_factory=list)
    products: list[list[object]] = field(default_factory=list)
    serving: list[list[object]] = field(default_factory=list)
    derivations: list[list[object]] = field(
        default_factory=lambda: [
            ["LCCS", "Calculated from value per serving size measure"],
            ["LCCD", "Calculated from a daily value percentage per serving size"],
        ]
    )

    def add_product(  # noqa: PLR0913
        self,
        food_id: int,
        *,
        name: str = "Test Bar",
        manufacturer: str = "Acme",
        servings: list[list[object]] | None = None,
        **macros: float | None,
    ) -> None:
        self.products.append(product_row(food_id, name, manufacturer))
        if servings is None:
            servings = [serving_row(food_id)]
        self.serving.extend(servings)
        self.nutrients.extend(macro_rows(food_id, **macros))

    def write(self, settings: Settings) -> None:
        extracts = {
            RecordKind.NUTRIENT: (NUTRIENT_HEADER, self.nutrients),
            RecordKind.PRODUCT: (PRODUCT_HEADER, self.products),
            RecordKind.SERVING: (SERVING_HEADER, self.serving),
            RecordKind.DERIVATION: (DERIVATION_HEADER, self.derivations),
        }
        for kind, (header, rows) in extracts.items():
            write_csv(settings.source_path(kind), header, rows)

    def load(self, settings: Settings, store: SqliteStore) -> None:
        """Write the extracts and load all four into the store."""
        self.write(settings)
        loader = BulkLoader()
        for kind in RecordKind:
            loader.load(store, kind, read_records(settings.source_path(kind), kind))


@dataclass
class RecordingProgress(ProgressReporter):
    """Progress reporter that records every call."""

    rows: list[tuple[str, int]] = field(default_factory=list)
    finished: list[tuple[str, int]] = field(default_factory=list)
    fractions: list[float] = field(default_factory=list)
    closed: bool = False

    def rows_loaded(self, table: str, count: int) -> None:
        self.rows.append((table, count))

    def load_finished(self, table: str, count: int) -> None:
        self.finished.append((table, count))

    def pages_copied(self, fraction: float) -> None:
        self.fractions.append(fraction)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=tmp_path / "nutr",
        output_path=tmp_path / "out" / "final_products.json",
        snapshot_path=tmp_path / "nutr.sqlite",
    )


@pytest.fixture
def store() -> Iterator[SqliteStore]:
    opened = SqliteStore.open(":memory:")
    yield opened
    opened.close()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def bar_data() -> SourceData:
    data = SourceData()
    data.add_product(100, name="Test Bar", manufacturer="Acme")
    return data
