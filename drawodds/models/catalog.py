"""
Card catalog models.

A catalog is the counted card list a deck is built from, keyed by card
name in the order the deck configuration supplied it. Entries are
validated once at this boundary; everything downstream trusts them.
"""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    PositiveInt,
    field_validator,
    model_validator,
)

from drawodds.models.card import CardCategory, categories_from_type_line


class CatalogError(ValueError):
    """Raised when a catalog entry cannot be turned into deck tokens."""

    def __init__(self, card_name: str, reason: str) -> None:
        self.card_name = card_name
        self.reason = reason
        super().__init__(f"Invalid catalog entry '{card_name}': {reason}")


class CatalogEntry(BaseModel):
    """
    One distinct card in a catalog with its copy count.

    Either `categories` or a `type_line` to derive them from must be given.
    """

    model_config = ConfigDict(frozen=True)

    count: PositiveInt
    categories: frozenset[CardCategory] = Field(default_factory=frozenset, validate_default=True)
    # Deck configurations spell this key manaValue
    mana_value: NonNegativeFloat = Field(
        default=0.0, validation_alias=AliasChoices("mana_value", "manaValue")
    )
    power: str | None = None
    type_line: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_categories(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("categories") and data.get("type_line"):
            data = {**data, "categories": categories_from_type_line(data["type_line"])}
        return data

    @field_validator("power", mode="before")
    @classmethod
    def _power_as_text(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("categories")
    @classmethod
    def _require_category(cls, value: frozenset[CardCategory]) -> frozenset[CardCategory]:
        if not value:
            raise ValueError("at least one category is required")
        return value


# Insertion order is expansion order
Catalog = dict[str, CatalogEntry]
