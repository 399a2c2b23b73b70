"""
Hypergeometric combinatorics for card draws.

Exact probabilities for drawing without replacement from a deck, for one
category of interest or for several categories at once. Every function is
pure and fails closed: impossible draws return 0 instead of raising, and
every probability returned lies in [0, 1].

Multi-category functions treat the categories as mutually exclusive
partitions of the deck, with everything else counted as "other". Decks
built from catalogs can tag one card with several categories; callers
that pass overlapping counts get the disjoint-model answer.
"""

from drawodds.models.distribution import DistributionPoint, ExactDistribution


def choose(n: int, k: int) -> int:
    """
    Binomial coefficient C(n, k).

    Built with the incremental multiplicative formula, which stays exact
    in Python integers for decks of several hundred cards.

    Returns:
        Number of k-subsets of an n-set; 0 when k < 0 or k > n.
    """
    if k < 0 or k > n:
        return 0
    k = min(k, n - k)
    result = 1
    for i in range(k):
        # Product of i + 1 consecutive integers is divisible by (i + 1)!
        result = result * (n - i) // (i + 1)
    return result


def _clamp(probability: float) -> float:
    return min(1.0, max(0.0, probability))


def exactly_k(population: int, successes: int, draws: int, hits: int) -> float:
    """
    Probability of exactly `hits` successes in a draw.

    P(X = k) = C(K, k) * C(N - K, n - k) / C(N, n)

    Args:
        population: Cards in the deck (N)
        successes: Cards in the deck that count as a success (K)
        draws: Cards drawn (n)
        hits: Successes wanted (k)

    Returns:
        Probability in [0, 1]; 0 for impossible combinations.

    Example:
        >>> round(exactly_k(60, 24, 7, 2), 4)
        0.2694
    """
    if hits < 0 or hits > successes:
        return 0.0
    misses = draws - hits
    if misses < 0 or misses > population - successes:
        return 0.0
    total = choose(population, draws)
    if total == 0:
        return 0.0
    return _clamp(choose(successes, hits) * choose(population - successes, misses) / total)


def at_least_k(population: int, successes: int, draws: int, minimum: int) -> float:
    """
    Probability of at least `minimum` successes in a draw.

    Computed from the complement of the low tail,
    1 - sum(P(X = i) for i < minimum), which is the short side for the
    thresholds calculators ask about.

    Example:
        >>> round(at_least_k(60, 24, 7, 1), 4)
        0.9784
    """
    if minimum <= 0:
        return 1.0
    total = choose(population, draws)
    if total == 0 or minimum > min(draws, successes):
        return 0.0

    failures = population - successes
    low_tail = 0
    for i in range(minimum):
        low_tail += choose(successes, i) * choose(failures, draws - i)
    return _clamp(1.0 - low_tail / total)


def at_least_two(
    population: int,
    first_count: int,
    second_count: int,
    draws: int,
    first_min: int,
    second_min: int,
) -> float:
    """
    Probability of meeting two category minimums in the same draw.

    Categories one, two and "other" partition the deck. A minimum of 0 or
    less makes that category's constraint vacuous, reducing the result to
    at_least_k for the remaining category.

    Args:
        population: Cards in the deck
        first_count: Cards of the first category
        second_count: Cards of the second category
        draws: Cards drawn
        first_min: Minimum first-category cards required
        second_min: Minimum second-category cards required

    Returns:
        P(X1 >= first_min and X2 >= second_min) in [0, 1].
    """
    total = choose(population, draws)
    if total == 0:
        return 0.0

    others = population - first_count - second_count
    favourable = 0
    for i in range(max(first_min, 0), min(draws, first_count) + 1):
        for j in range(max(second_min, 0), min(draws - i, second_count) + 1):
            rest = draws - i - j
            if rest < 0 or rest > others:
                continue
            favourable += choose(first_count, i) * choose(second_count, j) * choose(others, rest)
    return _clamp(favourable / total)


def at_least_three(
    population: int,
    first_count: int,
    second_count: int,
    third_count: int,
    draws: int,
    first_min: int,
    second_min: int,
    third_min: int,
) -> float:
    """Three-category analogue of at_least_two."""
    total = choose(population, draws)
    if total == 0:
        return 0.0

    others = population - first_count - second_count - third_count
    favourable = 0
    for i in range(max(first_min, 0), min(draws, first_count) + 1):
        first_ways = choose(first_count, i)
        for j in range(max(second_min, 0), min(draws - i, second_count) + 1):
            second_ways = choose(second_count, j)
            for m in range(max(third_min, 0), min(draws - i - j, third_count) + 1):
                rest = draws - i - j - m
                if rest < 0 or rest > others:
                    continue
                third_ways = choose(third_count, m)
                favourable += first_ways * second_ways * third_ways * choose(others, rest)
    return _clamp(favourable / total)


def multi_category_exactly(
    population: int,
    counts: list[int],
    draws: int,
    drawn: list[int],
) -> float:
    """
    Joint probability of drawing exactly drawn[i] cards of each category.

    Raises:
        ValueError: If counts and drawn differ in length
    """
    if len(counts) != len(drawn):
        raise ValueError(f"Got {len(counts)} category counts but {len(drawn)} draw targets")
    if any(d < 0 for d in drawn):
        return 0.0

    total = choose(population, draws)
    if total == 0:
        return 0.0

    numerator = choose(population - sum(counts), draws - sum(drawn))
    for count, wanted in zip(counts, drawn, strict=True):
        numerator *= choose(count, wanted)
    return _clamp(numerator / total)


def at_least_many(
    population: int,
    counts: list[int],
    draws: int,
    minimums: list[int],
) -> float:
    """
    Probability of meeting a minimum for every listed category.

    One to three categories use the closed-form helpers; more categories
    are enumerated recursively over every feasible combination.

    Raises:
        ValueError: If counts and minimums differ in length
    """
    if len(counts) != len(minimums):
        raise ValueError(f"Got {len(counts)} category counts but {len(minimums)} minimums")

    if not counts:
        return 1.0
    if len(counts) == 1:
        return at_least_k(population, counts[0], draws, minimums[0])
    if len(counts) == 2:
        return at_least_two(population, counts[0], counts[1], draws, minimums[0], minimums[1])
    if len(counts) == 3:
        return at_least_three(population, counts[0], counts[1], counts[2], draws, *minimums)

    total = choose(population, draws)
    if total == 0:
        return 0.0
    others = population - sum(counts)

    def favourable(index: int, remaining: int) -> int:
        if index == len(counts):
            return choose(others, remaining)
        ways = 0
        for taken in range(max(minimums[index], 0), min(counts[index], remaining) + 1):
            ways += choose(counts[index], taken) * favourable(index + 1, remaining - taken)
        return ways

    return _clamp(favourable(0, draws) / total)


def at_least_many_by_deadline(
    population: int,
    counts: list[int],
    minimums_by_seen: dict[int, list[int]],
) -> float:
    """
    Probability of meeting per-category minimums at several points in a draw.

    minimums_by_seen[s][i] is the minimum for category i among the first
    s cards drawn, so "a land in the opening hand and a ramp spell by the
    third draw" is {7: [1, 0], 10: [0, 1]}. The draw is split into
    windows at each deadline and every feasible per-window split is
    enumerated against the shrinking deck.

    Raises:
        ValueError: If any minimums list differs in length from counts
    """
    for minimums in minimums_by_seen.values():
        if len(minimums) != len(counts):
            raise ValueError(f"Got {len(counts)} category counts but {len(minimums)} minimums")

    if not minimums_by_seen:
        return 1.0
    deadlines = sorted(minimums_by_seen)
    if len(deadlines) == 1:
        seen = deadlines[0]
        return at_least_many(population, counts, seen, minimums_by_seen[seen])

    others = population - sum(counts)
    if others < 0 or any(count < 0 for count in counts):
        return 0.0

    def window_splits(remaining: tuple[int, ...], size: int) -> list[tuple[int, ...]]:
        splits: list[tuple[int, ...]] = [()]
        for left in remaining:
            splits = [
                split + (taken,)
                for split in splits
                for taken in range(min(left, size - sum(split)) + 1)
            ]
        return splits

    def walk(
        step: int,
        previous: int,
        remaining: tuple[int, ...],
        others_left: int,
        cumulative: tuple[int, ...],
    ) -> float:
        if step == len(deadlines):
            return 1.0
        deadline = deadlines[step]
        seen = min(max(deadline, 0), population)
        size = max(seen - previous, 0)
        total = choose(sum(remaining) + others_left, size)
        if total == 0:
            return 0.0

        minimums = minimums_by_seen[deadline]
        probability = 0.0
        for split in window_splits(remaining, size):
            rest = size - sum(split)
            if rest > others_left:
                continue
            reached = tuple(c + s for c, s in zip(cumulative, split, strict=True))
            if any(r < m for r, m in zip(reached, minimums, strict=True)):
                continue
            ways = choose(others_left, rest)
            for left, taken in zip(remaining, split, strict=True):
                ways *= choose(left, taken)
            after = tuple(left - taken for left, taken in zip(remaining, split, strict=True))
            probability += ways / total * walk(
                step + 1, max(seen, previous), after, others_left - rest, reached
            )
        return probability

    return _clamp(walk(0, 0, tuple(counts), others, (0,) * len(counts)))


def expected_successes(population: int, successes: int, draws: int) -> float:
    """Mean number of successes in a draw, n * K / N."""
    if population <= 0:
        return 0.0
    draws = min(max(draws, 0), population)
    return draws * successes / population


def exact_distribution(population: int, successes: int, draws: int) -> ExactDistribution:
    """
    Full probability mass function for a single-category draw.

    Drawing more cards than the deck holds draws the whole deck, so an
    empty deck degrades to a certain outcome of 0.

    Returns:
        ExactDistribution with one point per outcome 0..draws.
    """
    draws = max(draws, 0)
    effective_draws = min(draws, max(population, 0))
    points = [
        DistributionPoint(
            outcome=k,
            probability=(
                exactly_k(population, successes, effective_draws, k)
                if population > 0
                else float(k == 0)
            ),
        )
        for k in range(draws + 1)
    ]
    at_least = [
        at_least_k(population, successes, effective_draws, k) if population > 0 else float(k == 0)
        for k in range(draws + 1)
    ]
    return ExactDistribution(
        points=points,
        expected_value=expected_successes(population, successes, effective_draws),
        at_least=at_least,
    )
