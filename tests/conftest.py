from typing import Any

import pytest

from drawodds.config import Settings
from drawodds.services.calculator_context import CalculatorContext


@pytest.fixture
def test_settings() -> Settings:
    """Seeded settings so sampling tests are reproducible."""
    return Settings(
        random_seed=1234,
        cache_max_size=50,
        default_sample_count=200,
        simulation_iterations=2000,
    )


@pytest.fixture
def red_deck_catalog() -> dict[str, dict[str, Any]]:
    """60-card mono-red list: 24 lands, 36 spells, no multi-type cards."""
    return {
        "Mountain": {"count": 20, "type_line": "Basic Land — Mountain"},
        "Rockface Village": {"count": 4, "categories": ["land"]},
        "Monastery Swiftspear": {
            "count": 4,
            "categories": ["creature"],
            "mana_value": 1,
            "power": 1,
        },
        "Heartfire Hero": {"count": 12, "categories": ["creature"], "mana_value": 1, "power": "1"},
        "Lightning Bolt": {"count": 4, "categories": ["instant"], "mana_value": 1},
        "Burst Lightning": {"count": 8, "categories": ["instant"], "mana_value": 1},
        "Monstrous Rage": {"count": 8, "categories": ["instant"], "mana_value": 1},
    }


@pytest.fixture
def context(test_settings: Settings) -> CalculatorContext:
    return CalculatorContext(test_settings)


@pytest.fixture
def loaded_context(
    context: CalculatorContext, red_deck_catalog: dict[str, dict[str, Any]]
) -> CalculatorContext:
    context.load_catalog(red_deck_catalog)
    return context
