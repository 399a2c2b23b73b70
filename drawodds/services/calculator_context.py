"""
Per-calculator state.

Each calculator owns one context holding its catalog, the deck built from
it, a stable sample batch and a result cache. Loading a different catalog
is the single invalidation point: the deck is rebuilt, the cache cleared,
and the sampler regenerates on its next request because the deck
identity no longer matches its batch.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from drawodds.config import Settings, settings as default_settings
from drawodds.models.catalog import Catalog, CatalogEntry
from drawodds.models.deck import CatalogSummary, Deck, SampleBatch
from drawodds.services.deck_builder import (
    build_deck,
    catalog_identity,
    parse_catalog,
    summarize_catalog,
)
from drawodds.services.memo_cache import LRUCache
from drawodds.services.sampler import Sampler

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class CalculatorContext:
    """Catalog, deck, sample batch and cache owned by one calculator."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings if settings is not None else default_settings
        self._catalog: Catalog = {}
        self._deck = Deck()
        self._summary = CatalogSummary()
        self.sampler = Sampler(seed=self._settings.random_seed)
        self.cache = LRUCache(self._settings.cache_max_size)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def summary(self) -> CatalogSummary:
        return self._summary

    @property
    def deck_size(self) -> int:
        return self._deck.size

    def load_catalog(self, catalog: Mapping[str, Mapping[str, Any] | CatalogEntry]) -> bool:
        """
        Point this context at a catalog.

        Args:
            catalog: Validated catalog or raw entries to validate

        Returns:
            True if the catalog differed from the current one and state was
            rebuilt, False if it was identical and everything was kept.

        Raises:
            CatalogError: If raw entries fail validation
        """
        parsed = parse_catalog(catalog)
        identity = catalog_identity(parsed)
        if identity == self._deck.identity:
            return False

        previous = self._deck.identity
        self._catalog = parsed
        self._deck = build_deck(parsed)
        self._summary = summarize_catalog(parsed)
        cleared = len(self.cache)
        self.cache.clear()
        logger.info(
            "Catalog changed (%s -> %s); cleared %d cached results",
            previous,
            identity,
            cleared,
        )
        return True

    def samples(self, count: int | None = None) -> SampleBatch:
        """
        The first `count` samples of the current deck's stable batch.

        The sampler may hold more samples than requested from an earlier,
        larger query; only the requested prefix is returned, so results
        aggregated from it always cover exactly `count` samples.
        """
        if count is None:
            count = self._settings.default_sample_count
        count = max(count, 0)
        batch = self.sampler.build_sample_batch(self._deck, count)
        if batch.count == count:
            return batch
        return SampleBatch(batch.deck_identity, batch.slice(0, count))

    def memoize(self, key: str, compute: Callable[[], T]) -> T:
        """Cached result for `key`, computing and storing it on a miss."""
        value = self.cache.get(key, _MISSING)
        if value is _MISSING:
            value = compute()
            self.cache.set(key, value)
        return value  # type: ignore[no-any-return]
