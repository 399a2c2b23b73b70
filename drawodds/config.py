import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DRAWODDS_")

    app_name: str = "drawodds"
    log_level: str = "INFO"

    # Entries kept per calculator before least-recently-used eviction
    cache_max_size: int = 50

    # Shuffled permutations generated when a caller does not ask for a count
    default_sample_count: int = 500

    # Throwaway draws behind high-precision Monte Carlo estimates
    simulation_iterations: int = 25_000

    # Fixed seed for reproducible sampling; None draws OS entropy
    random_seed: int | None = None


settings = Settings()


# =============================================================================
# DRAW CONSTANTS
# =============================================================================

# Cards in an opening hand
OPENING_HAND_SIZE = 7

# Turns covered by per-turn land drop odds
MAX_TRACKED_TURNS = 10

# Distinct card types needed for a reveal effect to pay off
FREE_SPELL_THRESHOLD = 4


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and notebooks using the package."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
