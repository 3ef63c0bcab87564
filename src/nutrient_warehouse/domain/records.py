"""Pydantic models for rows of the USDA CSV extracts.

Header cells are lower-cased before validation, so every alias below is
written in lower case. The first choice of each alias list is the field's
own name, which keeps keyword construction working in code and tests.
"""

from typing import Annotated

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def _blank_to_none(value: object) -> object:
    """Treat an empty CSV cell as an absent value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalFloat = Annotated[float | None, BeforeValidator(_blank_to_none)]

# Range of a SQLite INTEGER column.
SqliteInt = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class NutrientRecord(BaseModel):
    """One measured nutrient of one food."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    food_id: SqliteInt = Field(
        validation_alias=AliasChoices("food_id", "ndb_no", "id")
    )
    nutrient_code: SqliteInt = Field(
        validation_alias=AliasChoices("nutrient_code", "nutrient_id")
    )
    name: str = Field(validation_alias=AliasChoices("name", "nutrient_name"))
    derivation_code: str = Field(validation_alias=AliasChoices("derivation_code"))
    value: float = Field(validation_alias=AliasChoices("value", "output_value"))
    unit: str = Field(validation_alias=AliasChoices("unit", "output_uom"))


class ProductRecord(BaseModel):
    """A food product and its label metadata."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: SqliteInt = Field(
        validation_alias=AliasChoices("id", "ndb_number", "ndb_no")
    )
    name: str = Field(validation_alias=AliasChoices("name", "long_name"))
    source: str = Field(validation_alias=AliasChoices("source", "data_source"))
    upc: str = Field(validation_alias=AliasChoices("upc", "gtin_upc"))
    manufacturer: str = Field(validation_alias=AliasChoices("manufacturer"))
    modified: str = Field(validation_alias=AliasChoices("modified", "date_modified"))
    available: str = Field(validation_alias=AliasChoices("available", "date_available"))
    ingredients: str = Field(
        validation_alias=AliasChoices("ingredients", "ingredients_english")
    )


class ServingRecord(BaseModel):
    """A serving size declared for a food."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    food_id: SqliteInt = Field(
        validation_alias=AliasChoices("food_id", "ndb_no", "id")
    )
    value: OptionalFloat = Field(
        default=None, validation_alias=AliasChoices("value", "serving_size")
    )
    unit: str = Field(validation_alias=AliasChoices("unit", "serving_size_uom"))
    household_value: OptionalFloat = Field(
        default=None,
        validation_alias=AliasChoices("household_value", "household_serving_size"),
    )
    household_unit: str = Field(
        validation_alias=AliasChoices("household_unit", "household_serving_size_uom")
    )
    prep_state: str = Field(
        validation_alias=AliasChoices("prep_state", "preparation_state")
    )


class DerivationRecord(BaseModel):
    """Lookup entry describing how a nutrient value was derived."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    code: str = Field(validation_alias=AliasChoices("code", "derivation_code"))
    description: str = Field(
        validation_alias=AliasChoices("description", "desc", "derivation_description")
    )


SourceRecord = NutrientRecord | ProductRecord | ServingRecord | DerivationRecord
