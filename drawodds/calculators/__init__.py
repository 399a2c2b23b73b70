from drawodds.calculators.hand_requirements import (
    HandRequirementsCalculator,
    Requirement,
    merge_requirements,
)
from drawodds.calculators.lands import LandDropCalculator, LandDropOdds, miss_probability
from drawodds.calculators.type_diversity import TypeDiversityCalculator

__all__ = [
    "HandRequirementsCalculator",
    "LandDropCalculator",
    "LandDropOdds",
    "Requirement",
    "TypeDiversityCalculator",
    "merge_requirements",
    "miss_probability",
]
