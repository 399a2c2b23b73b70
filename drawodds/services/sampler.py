"""
Deck sampler.

Produces unbiased shuffles of a deck and keeps a stable batch of them so
repeated queries against an unchanged deck see the same samples.

INVARIANT: a batch only ever holds samples of the deck whose identity it
carries. A new identity discards the batch.

INVARIANT: for an unchanged identity, sample i never changes. Asking for
more samples appends to the batch; asking for fewer reuses it as is.
"""

import logging
from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from drawodds.models.deck import Deck, Sample, SampleBatch

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(tokens: Sequence[T], rng: np.random.Generator | None = None) -> list[T]:
    """
    Uniformly random permutation of `tokens` (Fisher-Yates).

    The input is never mutated; a new list is returned.

    Args:
        tokens: Items to permute
        rng: Random generator; a fresh OS-seeded one if omitted

    Returns:
        New list holding every item exactly once. Empty for empty input.
    """
    shuffled = list(tokens)
    size = len(shuffled)
    if size < 2:
        return shuffled

    rng = rng if rng is not None else np.random.default_rng()
    # picks[s] is uniform over [0, i] for i = size - 1 - s
    picks = rng.integers(0, np.arange(size, 1, -1))
    for step, pick in enumerate(picks):
        i = size - 1 - step
        j = int(pick)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def partial_shuffle(
    tokens: Sequence[T], depth: int, rng: np.random.Generator | None = None
) -> list[T]:
    """
    Draw the top `depth` cards of a random permutation without finishing it.

    Runs the first `depth` steps of a forward Fisher-Yates shuffle, which
    is all a top-of-library reveal needs.

    Returns:
        The `depth` drawn items in draw order; depth is clamped to the input size.
    """
    pool = list(tokens)
    size = len(pool)
    depth = min(max(depth, 0), size)
    if depth == 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    # offsets[i] is uniform over [0, size - i)
    offsets = rng.integers(0, np.arange(size, size - depth, -1))
    for i, offset in enumerate(offsets):
        j = i + int(offset)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:depth]


class Sampler:
    """
    Owner of one stable sample batch.

    Usage:
        sampler = Sampler(seed=7)
        batch = sampler.build_sample_batch(deck, 500)
        # Same deck, same or smaller count -> the same batch object
        assert sampler.build_sample_batch(deck, 20) is batch
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._batch: SampleBatch | None = None

    @property
    def batch(self) -> SampleBatch | None:
        """The current batch, if one has been generated."""
        return self._batch

    def build_sample_batch(self, deck: Deck, count: int) -> SampleBatch:
        """
        Return at least `count` shuffles of `deck`, reusing cached samples.

        Args:
            deck: Deck to shuffle
            count: Samples needed; values below 0 are treated as 0

        Returns:
            The cached batch when it already covers `count` for this deck,
            otherwise a batch extended (same deck) or regenerated (new deck).
        """
        count = max(count, 0)
        current = self._batch

        if current is not None and current.deck_identity == deck.identity:
            if count <= current.count:
                return current
            extra = self._draw(deck, count - current.count)
            self._batch = SampleBatch(deck.identity, current.samples + extra)
            logger.debug(
                "Extended sample batch for deck %s from %d to %d",
                deck.identity,
                current.count,
                count,
            )
            return self._batch

        self._batch = SampleBatch(deck.identity, self._draw(deck, count))
        logger.debug("Generated %d samples for deck %s", count, deck.identity)
        return self._batch

    def draw_tops(self, deck: Deck, depth: int, count: int) -> SampleBatch:
        """
        Fresh, uncached batch of `count` partial shuffles `depth` cards deep.

        For high-iteration estimates that only look at the top of the deck.
        The stable batch is left untouched.
        """
        samples = tuple(
            tuple(partial_shuffle(deck.tokens, depth, self._rng)) for _ in range(max(count, 0))
        )
        return SampleBatch(deck.identity, samples)

    def reset(self) -> None:
        """Forget the cached batch."""
        self._batch = None

    def _draw(self, deck: Deck, count: int) -> tuple[Sample, ...]:
        return tuple(tuple(shuffle(deck.tokens, self._rng)) for _ in range(count))
