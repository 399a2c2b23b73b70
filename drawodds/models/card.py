from dataclasses import dataclass
from enum import Enum


class CardCategory(str, Enum):
    """Card types a token can be tagged with."""

    LAND = "land"
    CREATURE = "creature"
    INSTANT = "instant"
    SORCERY = "sorcery"
    ARTIFACT = "artifact"
    ENCHANTMENT = "enchantment"
    PLANESWALKER = "planeswalker"
    BATTLE = "battle"


def categories_from_type_line(type_line: str) -> frozenset[CardCategory]:
    """
    Resolve a type line into the set of categories it names.

    Matching is a case-insensitive substring test per category, so
    "Artifact Creature — Golem" yields {ARTIFACT, CREATURE}.

    Args:
        type_line: Card type line as printed (e.g., "Legendary Land")

    Returns:
        Frozen set of matched categories, empty if none match.
    """
    lower = type_line.lower()
    return frozenset(category for category in CardCategory if category.value in lower)


@dataclass(frozen=True, slots=True)
class CardToken:
    """
    One physical copy of a card in a deck.

    Attributes:
        name: Card name
        categories: Every tag this copy carries (may be more than one)
        mana_value: Converted mana cost, never negative
        power: Printed power for creatures ("*" allowed), None otherwise
    """

    name: str
    categories: frozenset[CardCategory]
    mana_value: float = 0.0
    power: str | None = None

    def has(self, category: CardCategory) -> bool:
        """True if this copy is tagged with `category`."""
        return category in self.categories

    @property
    def is_multi_category(self) -> bool:
        """True for cards such as artifact creatures that carry several tags."""
        return len(self.categories) > 1
