"""Pipeline configuration."""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from nutrient_warehouse.domain.catalog import RecordKind

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    data_dir: Path = Path("nutr")
    nutrients_file: str = "Nutrients.csv"
    products_file: str = "Products.csv"
    serving_file: str = "Serving_size.csv"
    derivations_file: str = "Derivation_Code_Description.csv"
    output_path: Path = Path("nutr/final_products.json")
    snapshot_path: Path = Path("nutr.sqlite")
    working_database: str = ":memory:"
    load_batch_size: int = 10_000
    load_progress_every: int = 1_000_000
    snapshot_pages_per_step: int = 250
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="NUTR_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def source_path(self, kind: "RecordKind") -> Path:
        """Return the CSV file that feeds a record kind."""
        file_names = {
            "nutrients": self.nutrients_file,
            "products": self.products_file,
            "serving": self.serving_file,
            "derivations": self.derivations_file,
        }
        return self.data_dir / file_names[kind.table]
