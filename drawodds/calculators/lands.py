"""
Land drop calculator.

How many lands an opening hand holds, and how likely the deck is to hit
a land drop every turn. Exact results come from the hypergeometric
engine; the simulated opening hand is the cross-check and the source of
the example hands shown to the player.
"""

from dataclasses import dataclass

from drawodds.analysis.aggregator import aggregate, count_in_top, sample_details
from drawodds.analysis.hypergeometric import at_least_k, exact_distribution
from drawodds.config import MAX_TRACKED_TURNS, OPENING_HAND_SIZE
from drawodds.models.card import CardCategory
from drawodds.models.distribution import ExactDistribution, SampleDetail, SimulatedDistribution
from drawodds.services.calculator_context import CalculatorContext
from drawodds.services.memo_cache import make_cache_key


@dataclass(frozen=True, slots=True)
class LandDropOdds:
    """Chance of having made every land drop through a turn."""

    turn: int
    make_probability: float
    miss_probability: float


def miss_probability(deck_size: int, land_count: int, turn: int) -> float:
    """
    Probability of having fewer than `turn` lands by that turn.

    By turn T the player has seen the opening hand plus T draws.
    """
    cards_seen = turn + OPENING_HAND_SIZE
    return 1.0 - at_least_k(deck_size, land_count, cards_seen, turn)


class LandDropCalculator:
    """Opening hand and land drop odds for the context's deck."""

    def __init__(self, context: CalculatorContext) -> None:
        self.context = context

    @property
    def land_count(self) -> int:
        return self.context.summary.count(CardCategory.LAND)

    def opening_hand(self, hand_size: int = OPENING_HAND_SIZE) -> ExactDistribution:
        """Exact distribution of lands in an opening hand."""
        deck_size = self.context.deck_size
        lands = self.land_count
        return self.context.memoize(
            make_cache_key("opening", deck_size, lands, hand_size),
            lambda: exact_distribution(deck_size, lands, hand_size),
        )

    def opening_hand_median(self, hand_size: int = OPENING_HAND_SIZE) -> int:
        """Median number of lands in an opening hand."""
        return self.opening_hand(hand_size).median()

    def land_drops_by_turn(self, max_turns: int = MAX_TRACKED_TURNS) -> list[LandDropOdds]:
        """Make/miss odds for every turn from 1 through `max_turns`."""
        deck_size = self.context.deck_size
        lands = self.land_count

        def compute() -> list[LandDropOdds]:
            results = []
            for turn in range(1, max_turns + 1):
                miss = miss_probability(deck_size, lands, turn)
                results.append(
                    LandDropOdds(turn=turn, make_probability=1.0 - miss, miss_probability=miss)
                )
            return results

        key = make_cache_key("landdrops", deck_size, lands, max_turns)
        return self.context.memoize(key, compute)

    def median_miss_turn(self) -> float:
        """
        First turn on which missing a land drop is more likely than not.

        Returns:
            1 for a deck with no lands, infinity for an all-land deck, the
            first turn up to MAX_TRACKED_TURNS whose miss odds exceed 50%,
            or an estimate from the non-land share past that.
        """
        deck_size = self.context.deck_size
        lands = self.land_count

        def compute() -> float:
            if lands == 0:
                return 1.0
            if lands >= deck_size:
                return float("inf")
            for turn in range(1, MAX_TRACKED_TURNS + 1):
                if miss_probability(deck_size, lands, turn) > 0.5:
                    return float(turn)
            return float(round(OPENING_HAND_SIZE / (1 - lands / deck_size)))

        return self.context.memoize(make_cache_key("miss", deck_size, lands), compute)

    def simulated_opening_hand(
        self,
        sample_count: int | None = None,
        hand_size: int = OPENING_HAND_SIZE,
    ) -> SimulatedDistribution:
        """Land counts across the stable sample batch's opening hands."""
        batch = self.context.samples(sample_count)
        return self.context.memoize(
            make_cache_key("simulated-opening", hand_size, batch.count),
            lambda: aggregate(batch, count_in_top(CardCategory.LAND, hand_size)),
        )

    def sample_reveals(
        self, start: int, end: int, hand_size: int = OPENING_HAND_SIZE
    ) -> list[SampleDetail]:
        """Example opening hands [start, end) with their land counts."""
        batch = self.context.samples(end)
        return sample_details(
            batch, count_in_top(CardCategory.LAND, hand_size), start, end, hand_size
        )
