"""Domain models for the denormalized product view."""

from dataclasses import dataclass
from enum import Enum


class MacroNutrient(Enum):
    """Nutrient codes pivoted into the final product view."""

    CALORIES = 208
    CARBS = 205
    FAT = 204
    PROTEIN = 203

    @property
    def column(self) -> str:
        """Column name used for this macro in pivots and output."""
        return self.name.lower()


@dataclass(frozen=True)
class Macros:
    """Macronutrient values for a product."""

    calories: float
    carbs: float
    fat: float
    protein: float


@dataclass(frozen=True)
class ServingAmount:
    """A serving quantity with its unit."""

    value: float
    units: str


@dataclass(frozen=True)
class ServingSize:
    """Raw and household serving sizes."""

    raw: ServingAmount
    household: ServingAmount


@dataclass(frozen=True)
class FinalProduct:
    """A product that passed the strict join."""

    id: int
    name: str
    manufacturer: str
    macros: Macros
    serving: ServingSize
