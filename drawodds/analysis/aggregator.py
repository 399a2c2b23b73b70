"""
Sample aggregation.

Classifies every sample in a batch with a pure function and folds the
outcomes into a frequency histogram, running sum and min/max in a single
pass. Classifiers only walk the top of each sample; they never copy it.
"""

from collections.abc import Callable, Sequence
from itertools import islice

import numpy as np

from drawodds.models.card import CardCategory
from drawodds.models.deck import Sample, SampleBatch
from drawodds.models.distribution import SampleDetail, SimulatedDistribution

Classifier = Callable[[Sample], int]


# =============================================================================
# CLASSIFIERS
# =============================================================================


def count_in_top(category: CardCategory, depth: int) -> Classifier:
    """Classifier counting `category` cards among the first `depth` cards."""

    def classify(sample: Sample) -> int:
        hits = 0
        for token in islice(sample, max(depth, 0)):
            if category in token.categories:
                hits += 1
        return hits

    return classify


def distinct_categories_in_top(depth: int) -> Classifier:
    """Classifier counting distinct card types among the first `depth` cards."""

    def classify(sample: Sample) -> int:
        seen: set[CardCategory] = set()
        for token in islice(sample, max(depth, 0)):
            seen |= token.categories
        return len(seen)

    return classify


def meets_minimums(requirements: Sequence[tuple[CardCategory, int]], depth: int) -> Classifier:
    """
    Classifier returning 1 when the first `depth` cards satisfy every
    (category, minimum) requirement, 0 otherwise.

    A card tagged with several required categories counts toward each.
    """
    return meets_deadlines([(category, minimum, depth) for category, minimum in requirements])


def meets_deadlines(requirements: Sequence[tuple[CardCategory, int, int]]) -> Classifier:
    """
    Classifier returning 1 when every (category, minimum, depth) holds,
    each checked against its own first `depth` cards.
    """

    def classify(sample: Sample) -> int:
        for category, minimum, depth in requirements:
            found = 0
            for token in islice(sample, max(depth, 0)):
                if category in token.categories:
                    found += 1
            if found < minimum:
                return 0
        return 1

    return classify


# =============================================================================
# AGGREGATION
# =============================================================================


def aggregate(batch: SampleBatch, classifier: Classifier) -> SimulatedDistribution:
    """
    Fold a batch into an empirical distribution.

    Args:
        batch: Samples to classify
        classifier: Pure function mapping a sample to a non-negative outcome

    Returns:
        SimulatedDistribution whose frequencies sum to batch.count.

    Raises:
        ValueError: If the classifier produces a negative outcome
    """
    histogram: dict[int, int] = {}
    total = 0
    minimum: int | None = None
    maximum: int | None = None

    for sample in batch.samples:
        outcome = classifier(sample)
        if outcome < 0:
            raise ValueError(f"Classifier produced negative outcome {outcome}")
        histogram[outcome] = histogram.get(outcome, 0) + 1
        total += outcome
        minimum = outcome if minimum is None else min(minimum, outcome)
        maximum = outcome if maximum is None else max(maximum, outcome)

    if minimum is None or maximum is None:
        return SimulatedDistribution()

    frequencies = np.zeros(maximum + 1, dtype=np.int64)
    for outcome, frequency in histogram.items():
        frequencies[outcome] = frequency

    return SimulatedDistribution(
        frequencies=frequencies,
        sample_count=batch.count,
        total=total,
        minimum=minimum,
        maximum=maximum,
    )


def sample_details(
    batch: SampleBatch,
    classifier: Classifier,
    start: int,
    end: int,
    depth: int,
) -> list[SampleDetail]:
    """
    Classified detail records for samples in [start, end).

    Callers page through a batch by asking for successive slices; the
    range is clamped to the batch, so paging past the end yields [].
    """
    start = max(start, 0)
    end = min(end, batch.count)
    details: list[SampleDetail] = []
    for index in range(start, end):
        sample = batch.samples[index]
        details.append(
            SampleDetail(
                index=index,
                outcome=classifier(sample),
                cards=tuple(token.name for token in islice(sample, max(depth, 0))),
            )
        )
    return details


def relative_error(simulated: SimulatedDistribution, expected_value: float) -> float:
    """
    Distance of the empirical mean from an exact expectation.

    Relative to the expectation, or absolute when the expectation is 0.
    """
    deviation = abs(simulated.average - expected_value)
    if expected_value == 0:
        return deviation
    return deviation / abs(expected_value)
