"""
drawodds services.

Stateful building blocks calculators are assembled from.
"""

from drawodds.services.calculator_context import CalculatorContext
from drawodds.services.deck_builder import (
    build_deck,
    catalog_identity,
    parse_catalog,
    summarize_catalog,
)
from drawodds.services.memo_cache import DEFAULT_MAX_SIZE, LRUCache, make_cache_key
from drawodds.services.sampler import Sampler, partial_shuffle, shuffle

__all__ = [
    "CalculatorContext",
    "DEFAULT_MAX_SIZE",
    "LRUCache",
    "Sampler",
    "build_deck",
    "catalog_identity",
    "make_cache_key",
    "parse_catalog",
    "partial_shuffle",
    "shuffle",
    "summarize_catalog",
]
