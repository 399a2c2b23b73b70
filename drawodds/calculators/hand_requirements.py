"""
Hand requirements calculator.

Probability that a deck delivers at least a minimum number of cards from
each of several categories ("two lands in the opening hand and a ramp
spell by turn two"). Each requirement carries a deadline: by turn T the
player has seen the opening hand plus T draws, with turn 0 being the
opening hand itself.

The exact answer treats the categories as disjoint. Cards tagged with
more than one requested category are counted in each category's
population, so for such decks the exact and simulated answers diverge;
a warning is logged when that happens.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from drawodds.analysis.aggregator import aggregate, meets_deadlines
from drawodds.analysis.hypergeometric import at_least_many_by_deadline
from drawodds.config import OPENING_HAND_SIZE
from drawodds.models.card import CardCategory
from drawodds.services.calculator_context import CalculatorContext
from drawodds.services.memo_cache import make_cache_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Requirement:
    """At least `minimum` cards of `category` seen by turn `by_turn` (0 = opening hand)."""

    category: CardCategory
    minimum: int
    by_turn: int = 0

    def cards_seen(self, hand_size: int) -> int:
        """Cards drawn from the top of the deck by this requirement's deadline."""
        return hand_size + max(self.by_turn, 0)


def merge_requirements(requirements: Sequence[Requirement]) -> list[Requirement]:
    """
    One requirement per category and deadline, keeping the strictest minimum.

    Order follows the first appearance of each (category, by_turn) pair.
    """
    merged: dict[tuple[CardCategory, int], int] = {}
    for requirement in requirements:
        key = (requirement.category, max(requirement.by_turn, 0))
        current = merged.get(key)
        if current is None or requirement.minimum > current:
            merged[key] = requirement.minimum
    return [
        Requirement(category, minimum, by_turn) for (category, by_turn), minimum in merged.items()
    ]


class HandRequirementsCalculator:
    """Exact and simulated odds of a deck meeting per-category minimums."""

    def __init__(self, context: CalculatorContext) -> None:
        self.context = context

    def exact(
        self, requirements: Sequence[Requirement], hand_size: int = OPENING_HAND_SIZE
    ) -> float:
        """Closed-form probability that every requirement is met by its deadline."""
        merged = merge_requirements(requirements)
        deck_size = self.context.deck_size
        summary = self.context.summary

        categories = list(dict.fromkeys(r.category for r in merged))
        counts = [summary.count(category) for category in categories]
        minimums_by_seen: dict[int, list[int]] = {}
        for r in merged:
            minimums = minimums_by_seen.setdefault(r.cards_seen(hand_size), [0] * len(categories))
            index = categories.index(r.category)
            minimums[index] = max(minimums[index], r.minimum)

        def compute() -> float:
            self._warn_on_overlap(categories)
            return at_least_many_by_deadline(deck_size, counts, minimums_by_seen)

        return self.context.memoize(
            make_cache_key("hand", deck_size, hand_size, *_key_parts(merged)), compute
        )

    def simulated(
        self,
        requirements: Sequence[Requirement],
        sample_count: int | None = None,
        hand_size: int = OPENING_HAND_SIZE,
    ) -> float:
        """Share of stable-batch samples meeting every requirement by its deadline."""
        merged = merge_requirements(requirements)
        batch = self.context.samples(sample_count)
        checks = [(r.category, r.minimum, r.cards_seen(hand_size)) for r in merged]
        distribution = self.context.memoize(
            make_cache_key("simulated-hand", hand_size, batch.count, *_key_parts(merged)),
            lambda: aggregate(batch, meets_deadlines(checks)),
        )
        return distribution.average

    def _warn_on_overlap(self, categories: Sequence[CardCategory]) -> None:
        requested = frozenset(categories)
        overlapping = sum(
            1 for token in self.context.deck if len(token.categories & requested) > 1
        )
        if overlapping:
            logger.warning(
                "%d cards belong to more than one of %s; exact odds treat them as separate cards",
                overlapping,
                sorted(category.value for category in requested),
            )


def _key_parts(requirements: Sequence[Requirement]) -> list[str]:
    return [f"{r.category.value}:{r.minimum}@{r.by_turn}" for r in requirements]
