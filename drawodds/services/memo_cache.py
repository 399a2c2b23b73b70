"""
Bounded memoization cache.

Least-recently-used store for computed calculator results. The cache has
no idea what its values were computed from: callers clear it (or change
their keys) whenever the deck changes.
"""

import logging
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 50


def make_cache_key(*parts: object) -> str:
    """Composite key from query parameters, e.g. ("opening", 60, 24) -> "opening-60-24"."""
    return "-".join(str(part) for part in parts)


class LRUCache:
    """
    Key -> value store evicting the least recently used entry when full.

    get() and set() are O(1); recency order lives in an OrderedDict with
    the least recently used key first.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self._max_size = max(1, max_size)
        self._entries: OrderedDict[str, Any] = OrderedDict()

    @property
    def max_size(self) -> int:
        """Maximum number of entries held."""
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Membership checks do not count as use
        return key in self._entries

    def get(self, key: str, default: Any = None) -> Any:
        """Cached value for `key`, marking it most recently used; `default` on a miss."""
        if key not in self._entries:
            return default
        self._entries.move_to_end(key)
        return self._entries[key]

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite `key`, evicting the least recently used entry if full."""
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cache entry %s", evicted)
        self._entries[key] = value

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
