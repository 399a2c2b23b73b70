"""
Distribution result models.

Exact results come from closed-form hypergeometric math and carry
probabilities. Simulated results come from shuffled sample batches and
carry raw frequencies; both are dense over outcomes 0..max.
"""

from dataclasses import dataclass, field

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class DistributionPoint(BaseModel):
    """Probability of one integer outcome."""

    model_config = ConfigDict(frozen=True)

    outcome: int = Field(ge=0)
    probability: float = Field(ge=0.0, le=1.0)


class ExactDistribution(BaseModel):
    """
    Exact probability mass function over outcomes 0..n.

    Attributes:
        points: One point per outcome, ordered by outcome
        expected_value: Mean outcome
        at_least: at_least[k] is P(X >= k); at_least[0] is always 1
    """

    model_config = ConfigDict(frozen=True)

    points: list[DistributionPoint]
    expected_value: float = Field(ge=0.0)
    at_least: list[float] = Field(default_factory=list)

    def probability(self, outcome: int) -> float:
        """P(X == outcome), 0 outside the support."""
        if 0 <= outcome < len(self.points):
            return self.points[outcome].probability
        return 0.0

    def median(self) -> int:
        """Smallest outcome whose cumulative probability reaches one half."""
        cumulative = 0.0
        for point in self.points:
            cumulative += point.probability
            if cumulative >= 0.5:
                return point.outcome
        return self.points[-1].outcome if self.points else 0


@dataclass(eq=False)
class SimulatedDistribution:
    """
    Empirical outcome frequencies from a sample batch.

    Attributes:
        frequencies: frequencies[k] is how many samples produced outcome k
        sample_count: Samples aggregated (sum of frequencies)
        total: Sum of all outcomes, for the running mean
        minimum: Smallest observed outcome (0 for an empty batch)
        maximum: Largest observed outcome (0 for an empty batch)
    """

    frequencies: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    sample_count: int = 0
    total: int = 0
    minimum: int = 0
    maximum: int = 0

    @property
    def average(self) -> float:
        """Empirical mean outcome."""
        if self.sample_count == 0:
            return 0.0
        return self.total / self.sample_count

    def probabilities(self) -> np.ndarray:
        """Frequencies normalised by sample count."""
        if self.sample_count == 0:
            return np.zeros(len(self.frequencies), dtype=np.float64)
        return self.frequencies / self.sample_count

    def probability_at_least(self, outcome: int) -> float:
        """Share of samples whose outcome was at least `outcome`."""
        if self.sample_count == 0:
            return 0.0
        if outcome <= 0:
            return 1.0
        return float(self.frequencies[outcome:].sum()) / self.sample_count

    def to_dict(self) -> dict[str, object]:
        """Plain representation for display collaborators."""
        return {
            "frequencies": [int(f) for f in self.frequencies],
            "sample_count": self.sample_count,
            "average": self.average,
            "min": self.minimum,
            "max": self.maximum,
        }


@dataclass(frozen=True, slots=True)
class SampleDetail:
    """One sample's classified outcome plus the cards that produced it."""

    index: int
    outcome: int
    cards: tuple[str, ...]
