"""
Deck builder service.

Turns a counted catalog into the flat token list the sampler shuffles,
and derives the scalar summaries exact calculations need.
"""

import hashlib
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from drawodds.models.card import CardCategory, CardToken
from drawodds.models.catalog import Catalog, CatalogEntry, CatalogError
from drawodds.models.deck import EMPTY_DECK_IDENTITY, CatalogSummary, Deck

logger = logging.getLogger(__name__)


def parse_catalog(raw: Mapping[str, Mapping[str, Any] | CatalogEntry]) -> Catalog:
    """
    Validate raw catalog input from a deck configuration or import.

    Args:
        raw: Card name -> {count, categories | type_line, mana_value, power}

    Returns:
        Catalog preserving the input order.

    Raises:
        CatalogError: If a name is blank or an entry fails validation
    """
    catalog: Catalog = {}
    for name, data in raw.items():
        if not isinstance(name, str) or not name.strip():
            raise CatalogError(str(name), "card name must be a non-empty string")
        if isinstance(data, CatalogEntry):
            catalog[name] = data
            continue
        try:
            catalog[name] = CatalogEntry.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "entry"
            raise CatalogError(name, f"{location}: {first['msg']}") from e
    return catalog


def catalog_identity(catalog: Catalog) -> str:
    """
    Stable digest of a catalog's contents and order.

    Two catalogs listing the same cards, counts and tags in the same order
    share an identity, which is what sample batches and caches key on.
    """
    if not catalog:
        return EMPTY_DECK_IDENTITY

    payload = [
        [
            name,
            entry.count,
            sorted(category.value for category in entry.categories),
            entry.mana_value,
            entry.power,
        ]
        for name, entry in catalog.items()
    ]
    encoded = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()[:16]


def build_deck(catalog: Catalog) -> Deck:
    """
    Expand a catalog into one token per physical card.

    Entries are expanded in catalog order, each replicated `count` times
    before moving on. Copies of one entry share a single token object.
    """
    tokens: list[CardToken] = []
    for name, entry in catalog.items():
        token = CardToken(
            name=name,
            categories=entry.categories,
            mana_value=entry.mana_value,
            power=entry.power,
        )
        tokens.extend([token] * entry.count)

    deck = Deck(tokens=tuple(tokens), identity=catalog_identity(catalog))
    logger.debug("Built deck %s with %d cards", deck.identity, deck.size)
    return deck


def summarize_catalog(catalog: Catalog) -> CatalogSummary:
    """Deck size, per-category populations and multi-category card count."""
    deck_size = 0
    multi_category = 0
    category_counts: dict[CardCategory, int] = {}

    for entry in catalog.values():
        deck_size += entry.count
        if len(entry.categories) > 1:
            multi_category += entry.count
        for category in entry.categories:
            category_counts[category] = category_counts.get(category, 0) + entry.count

    return CatalogSummary(
        deck_size=deck_size,
        category_counts=category_counts,
        multi_category_tokens=multi_category,
    )
