from drawodds.analysis.aggregator import (
    Classifier,
    aggregate,
    count_in_top,
    distinct_categories_in_top,
    meets_deadlines,
    meets_minimums,
    relative_error,
    sample_details,
)
from drawodds.analysis.hypergeometric import (
    at_least_k,
    at_least_many,
    at_least_many_by_deadline,
    at_least_three,
    at_least_two,
    choose,
    exact_distribution,
    exactly_k,
    expected_successes,
    multi_category_exactly,
)

__all__ = [
    "Classifier",
    "aggregate",
    "at_least_k",
    "at_least_many",
    "at_least_many_by_deadline",
    "at_least_three",
    "at_least_two",
    "choose",
    "count_in_top",
    "distinct_categories_in_top",
    "exact_distribution",
    "exactly_k",
    "expected_successes",
    "meets_deadlines",
    "meets_minimums",
    "multi_category_exactly",
    "relative_error",
    "sample_details",
]
