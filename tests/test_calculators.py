"""Tests for the land drop, type diversity and hand requirements calculators."""

import logging
import math
from typing import Any

import pytest

from drawodds.analysis.hypergeometric import at_least_k, at_least_many_by_deadline, at_least_two
from drawodds.calculators.hand_requirements import (
    HandRequirementsCalculator,
    Requirement,
    merge_requirements,
)
from drawodds.calculators.lands import LandDropCalculator, miss_probability
from drawodds.calculators.type_diversity import TypeDiversityCalculator
from drawodds.config import Settings
from drawodds.models.card import CardCategory
from drawodds.services.calculator_context import CalculatorContext


def _lands_and_spells(lands: int, spells: int) -> dict[str, dict[str, Any]]:
    catalog: dict[str, dict[str, Any]] = {}
    if lands:
        catalog["Mountain"] = {"count": lands, "categories": ["land"]}
    if spells:
        catalog["Shock"] = {"count": spells, "categories": ["instant"], "mana_value": 1}
    return catalog


class TestLandDropCalculator:
    def test_opening_hand_distribution(self, loaded_context: CalculatorContext) -> None:
        distribution = LandDropCalculator(loaded_context).opening_hand()

        assert distribution.probability(2) == pytest.approx(0.2694, abs=1e-4)
        assert distribution.expected_value == pytest.approx(2.8)
        assert sum(p.probability for p in distribution.points) == pytest.approx(1.0, abs=1e-9)

    def test_opening_hand_is_cached(self, loaded_context: CalculatorContext) -> None:
        calculator = LandDropCalculator(loaded_context)
        assert calculator.opening_hand() is calculator.opening_hand()

    def test_opening_hand_median(self, loaded_context: CalculatorContext) -> None:
        assert LandDropCalculator(loaded_context).opening_hand_median() == 3

    def test_land_drops_by_turn(self, loaded_context: CalculatorContext) -> None:
        odds = LandDropCalculator(loaded_context).land_drops_by_turn()

        assert [o.turn for o in odds] == list(range(1, 11))
        for o in odds:
            assert o.make_probability + o.miss_probability == pytest.approx(1.0)
        assert odds[0].make_probability == pytest.approx(at_least_k(60, 24, 8, 1))
        # Needing a land every turn gets harder as turns go by
        assert odds[-1].miss_probability > odds[0].miss_probability

    def test_miss_probability(self) -> None:
        assert miss_probability(60, 24, 3) == pytest.approx(1 - at_least_k(60, 24, 10, 3))

    def test_median_miss_turn_without_lands(self, context: CalculatorContext) -> None:
        context.load_catalog(_lands_and_spells(0, 60))
        assert LandDropCalculator(context).median_miss_turn() == 1.0

    def test_median_miss_turn_all_lands(self, context: CalculatorContext) -> None:
        context.load_catalog(_lands_and_spells(60, 0))
        assert math.isinf(LandDropCalculator(context).median_miss_turn())

    def test_median_miss_turn_land_heavy_uses_estimate(self, context: CalculatorContext) -> None:
        """40 of 60 lands never crosses 50% by turn 10: 7 / (1 - 2/3) = 21."""
        context.load_catalog(_lands_and_spells(40, 20))
        assert LandDropCalculator(context).median_miss_turn() == 21.0

    def test_median_miss_turn_within_tracked_turns(
        self, loaded_context: CalculatorContext
    ) -> None:
        turn = LandDropCalculator(loaded_context).median_miss_turn()

        assert 1 <= turn <= 10
        assert miss_probability(60, 24, int(turn)) > 0.5
        assert all(miss_probability(60, 24, t) <= 0.5 for t in range(1, int(turn)))

    def test_empty_deck_degrades(self, context: CalculatorContext) -> None:
        distribution = LandDropCalculator(context).opening_hand()
        assert distribution.probability(0) == 1.0
        assert distribution.expected_value == 0.0

    def test_catalog_change_recomputes(
        self, loaded_context: CalculatorContext, red_deck_catalog: dict[str, dict[str, Any]]
    ) -> None:
        calculator = LandDropCalculator(loaded_context)
        before = calculator.opening_hand()

        changed = dict(red_deck_catalog)
        changed["Rockface Village"] = {"count": 8, "categories": ["land"]}
        loaded_context.load_catalog(changed)
        after = calculator.opening_hand()

        assert after is not before
        assert after.expected_value == pytest.approx(7 * 28 / 64)

    def test_simulated_opening_hand_tracks_exact(self, loaded_context: CalculatorContext) -> None:
        calculator = LandDropCalculator(loaded_context)
        simulated = calculator.simulated_opening_hand(2000)

        assert simulated.sample_count == 2000
        assert simulated.average == pytest.approx(2.8, rel=0.05)
        assert simulated.maximum <= 7

    def test_smaller_simulation_after_larger_uses_requested_count(
        self, loaded_context: CalculatorContext
    ) -> None:
        calculator = LandDropCalculator(loaded_context)
        larger = calculator.simulated_opening_hand(500)
        smaller = calculator.simulated_opening_hand(100)

        assert larger.sample_count == 500
        assert smaller.sample_count == 100
        assert int(smaller.frequencies.sum()) == 100

    def test_sample_reveals_are_stable(self, loaded_context: CalculatorContext) -> None:
        calculator = LandDropCalculator(loaded_context)
        first_page = calculator.sample_reveals(0, 5)
        calculator.simulated_opening_hand(500)
        again = calculator.sample_reveals(0, 5)
        next_page = calculator.sample_reveals(5, 10)

        assert again == first_page
        assert [d.index for d in next_page] == [5, 6, 7, 8, 9]
        assert all(len(d.cards) == 7 for d in first_page)

    def test_sample_reveal_outcome_counts_lands(self, loaded_context: CalculatorContext) -> None:
        land_names = {"Mountain", "Rockface Village"}
        for detail in LandDropCalculator(loaded_context).sample_reveals(0, 20):
            assert detail.outcome == sum(1 for name in detail.cards if name in land_names)


@pytest.fixture
def four_type_catalog() -> dict[str, dict[str, Any]]:
    return {
        "Mountain": {"count": 20, "categories": ["land"]},
        "Goblin Guide": {"count": 20, "categories": ["creature"]},
        "Shock": {"count": 10, "categories": ["instant"]},
        "Lava Spike": {"count": 10, "categories": ["sorcery"]},
    }


class TestTypeDiversityCalculator:
    def test_single_card_reveals_one_type(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        distribution = TypeDiversityCalculator(context).distinct_types(1)

        assert distribution.minimum == distribution.maximum == 1
        assert distribution.average == 1.0

    def test_bounded_by_types_in_deck(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        distribution = TypeDiversityCalculator(context).distinct_types(10)

        assert distribution.maximum <= 4
        assert int(distribution.frequencies.sum()) == distribution.sample_count

    def test_whole_deck_reveals_every_type(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        assert TypeDiversityCalculator(context).probability_at_least(60) == 1.0

    def test_more_cards_more_types(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        profile = TypeDiversityCalculator(context).by_depth(range(1, 8))

        assert list(profile) == list(range(1, 8))
        assert profile[7].average > profile[1].average

    def test_multi_type_cards_count_every_type(self, context: CalculatorContext) -> None:
        context.load_catalog({"Ornithopter": {"count": 30, "type_line": "Artifact Creature"}})
        assert TypeDiversityCalculator(context).distinct_types(1).average == 2.0

    def test_estimate_leaves_stable_batch(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        calculator = TypeDiversityCalculator(context)
        batch = context.samples()
        estimate = calculator.estimate(1, iterations=300)

        assert context.sampler.batch is batch
        assert estimate.sample_count == 300
        assert estimate.average == 1.0

    def test_estimate_defaults_to_configured_iterations(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        estimate = TypeDiversityCalculator(context).estimate(3)
        assert estimate.sample_count == context.settings.simulation_iterations

    def test_smaller_request_after_larger_uses_requested_count(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        calculator = TypeDiversityCalculator(context)
        calculator.distinct_types(5, sample_count=500)
        smaller = calculator.distinct_types(5, sample_count=100)

        assert smaller.sample_count == 100
        assert int(smaller.frequencies.sum()) == 100

    def test_sample_reveals(
        self, context: CalculatorContext, four_type_catalog: dict[str, dict[str, Any]]
    ) -> None:
        context.load_catalog(four_type_catalog)
        details = TypeDiversityCalculator(context).sample_reveals(0, 3, 5)

        assert len(details) == 3
        assert all(len(d.cards) == 5 and 1 <= d.outcome <= 4 for d in details)


class TestHandRequirementsCalculator:
    def test_single_requirement_matches_at_least_k(
        self, loaded_context: CalculatorContext
    ) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        probability = calculator.exact([Requirement(CardCategory.LAND, 2)])
        assert probability == pytest.approx(at_least_k(60, 24, 7, 2))

    def test_two_requirements_match_closed_form(self, loaded_context: CalculatorContext) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        probability = calculator.exact(
            [Requirement(CardCategory.LAND, 2), Requirement(CardCategory.CREATURE, 1)]
        )
        assert probability == pytest.approx(at_least_two(60, 24, 16, 7, 2, 1))

    def test_simulated_tracks_exact_for_disjoint_deck(
        self, loaded_context: CalculatorContext
    ) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        requirements = [Requirement(CardCategory.LAND, 2), Requirement(CardCategory.INSTANT, 1)]

        exact = calculator.exact(requirements)
        simulated = calculator.simulated(requirements, sample_count=3000)

        assert simulated == pytest.approx(exact, abs=0.05)

    def test_duplicate_categories_keep_strictest(self) -> None:
        merged = merge_requirements(
            [
                Requirement(CardCategory.LAND, 2),
                Requirement(CardCategory.CREATURE, 1),
                Requirement(CardCategory.LAND, 3),
            ]
        )
        assert merged == [
            Requirement(CardCategory.LAND, 3),
            Requirement(CardCategory.CREATURE, 1),
        ]

    def test_smaller_simulation_after_larger_uses_requested_count(
        self, loaded_context: CalculatorContext, test_settings: Settings
    ) -> None:
        """100 samples after 3000 equals 100 samples from a fresh, identically seeded context."""
        requirements = [Requirement(CardCategory.LAND, 3), Requirement(CardCategory.INSTANT, 2)]
        HandRequirementsCalculator(loaded_context).simulated(requirements, sample_count=3000)
        after_larger = HandRequirementsCalculator(loaded_context).simulated(
            requirements, sample_count=100
        )

        fresh = CalculatorContext(test_settings)
        fresh.load_catalog(loaded_context.catalog)
        alone = HandRequirementsCalculator(fresh).simulated(requirements, sample_count=100)

        assert after_larger == alone

    def test_deadline_widens_the_draw(self, loaded_context: CalculatorContext) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        by_turn_three = calculator.exact([Requirement(CardCategory.LAND, 3, by_turn=3)])
        assert by_turn_three == pytest.approx(at_least_k(60, 24, 10, 3))

    def test_mixed_deadlines_match_engine(self, loaded_context: CalculatorContext) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        probability = calculator.exact(
            [
                Requirement(CardCategory.LAND, 2),
                Requirement(CardCategory.CREATURE, 1, by_turn=2),
                Requirement(CardCategory.LAND, 3, by_turn=2),
            ]
        )
        expected = at_least_many_by_deadline(60, [24, 16], {7: [2, 0], 9: [3, 1]})
        assert probability == pytest.approx(expected)

    def test_simulated_deadlines_track_exact(self, loaded_context: CalculatorContext) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        requirements = [
            Requirement(CardCategory.LAND, 2),
            Requirement(CardCategory.INSTANT, 2, by_turn=3),
        ]

        exact = calculator.exact(requirements)
        simulated = calculator.simulated(requirements, sample_count=3000)

        assert simulated == pytest.approx(exact, abs=0.05)

    def test_merge_keeps_separate_deadlines(self) -> None:
        merged = merge_requirements(
            [
                Requirement(CardCategory.LAND, 2),
                Requirement(CardCategory.LAND, 4, by_turn=3),
                Requirement(CardCategory.LAND, 3, by_turn=3),
            ]
        )
        assert merged == [
            Requirement(CardCategory.LAND, 2),
            Requirement(CardCategory.LAND, 4, by_turn=3),
        ]

    def test_no_requirements_is_certain(self, loaded_context: CalculatorContext) -> None:
        assert HandRequirementsCalculator(loaded_context).exact([]) == 1.0

    def test_overlapping_categories_warn(
        self, context: CalculatorContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        context.load_catalog(
            {
                "Forest": {"count": 20, "categories": ["land"]},
                "Dryad Arbor": {"count": 4, "categories": ["land", "creature"]},
                "Llanowar Elves": {"count": 36, "categories": ["creature"]},
            }
        )
        calculator = HandRequirementsCalculator(context)

        with caplog.at_level(logging.WARNING, logger="drawodds.calculators.hand_requirements"):
            calculator.exact(
                [Requirement(CardCategory.LAND, 1), Requirement(CardCategory.CREATURE, 1)]
            )

        assert "4 cards belong to more than one" in caplog.text

    def test_disjoint_categories_do_not_warn(
        self, loaded_context: CalculatorContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        calculator = HandRequirementsCalculator(loaded_context)
        with caplog.at_level(logging.WARNING, logger="drawodds.calculators.hand_requirements"):
            calculator.exact(
                [Requirement(CardCategory.LAND, 1), Requirement(CardCategory.INSTANT, 1)]
            )
        assert caplog.text == ""
