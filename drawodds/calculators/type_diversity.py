"""
Type diversity calculator.

For effects that reveal the top X cards of the library and reward the
number of distinct card types among them. Multi-type cards contribute
every type they carry, which is why this is simulated rather than solved
in closed form.
"""

from drawodds.analysis.aggregator import aggregate, distinct_categories_in_top, sample_details
from drawodds.config import FREE_SPELL_THRESHOLD
from drawodds.models.distribution import SampleDetail, SimulatedDistribution
from drawodds.services.calculator_context import CalculatorContext
from drawodds.services.memo_cache import make_cache_key


class TypeDiversityCalculator:
    """Distinct-type odds for the top cards of the context's deck."""

    def __init__(self, context: CalculatorContext) -> None:
        self.context = context

    def distinct_types(self, depth: int, sample_count: int | None = None) -> SimulatedDistribution:
        """Distinct types among the top `depth` cards across the stable batch."""
        batch = self.context.samples(sample_count)
        return self.context.memoize(
            make_cache_key("diversity", depth, batch.count),
            lambda: aggregate(batch, distinct_categories_in_top(depth)),
        )

    def probability_at_least(
        self,
        depth: int,
        threshold: int = FREE_SPELL_THRESHOLD,
        sample_count: int | None = None,
    ) -> float:
        """Share of samples revealing at least `threshold` distinct types."""
        return self.distinct_types(depth, sample_count).probability_at_least(threshold)

    def estimate(self, depth: int, iterations: int | None = None) -> SimulatedDistribution:
        """
        High-iteration estimate from throwaway partial shuffles.

        Leaves the stable batch alone, so displayed example reveals do not
        change when a more precise number is requested.
        """
        if iterations is None:
            iterations = self.context.settings.simulation_iterations

        def compute() -> SimulatedDistribution:
            tops = self.context.sampler.draw_tops(self.context.deck, depth, iterations)
            return aggregate(tops, distinct_categories_in_top(depth))

        return self.context.memoize(make_cache_key("estimate", depth, iterations), compute)

    def by_depth(
        self, depths: range, sample_count: int | None = None
    ) -> dict[int, SimulatedDistribution]:
        """distinct_types for every depth in `depths`."""
        return {depth: self.distinct_types(depth, sample_count) for depth in depths}

    def sample_reveals(self, start: int, end: int, depth: int) -> list[SampleDetail]:
        """Example reveals [start, end) with their distinct type counts."""
        batch = self.context.samples(end)
        return sample_details(batch, distinct_categories_in_top(depth), start, end, depth)
