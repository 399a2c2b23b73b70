from drawodds.models.card import CardCategory, CardToken, categories_from_type_line
from drawodds.models.catalog import Catalog, CatalogEntry, CatalogError
from drawodds.models.deck import (
    EMPTY_DECK_IDENTITY,
    CatalogSummary,
    Deck,
    Sample,
    SampleBatch,
)
from drawodds.models.distribution import (
    DistributionPoint,
    ExactDistribution,
    SampleDetail,
    SimulatedDistribution,
)

__all__ = [
    "EMPTY_DECK_IDENTITY",
    "CardCategory",
    "CardToken",
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "CatalogSummary",
    "Deck",
    "DistributionPoint",
    "ExactDistribution",
    "Sample",
    "SampleBatch",
    "SampleDetail",
    "SimulatedDistribution",
    "categories_from_type_line",
]
