from collections.abc import Iterator
from dataclasses import dataclass, field

from drawodds.models.card import CardCategory, CardToken

# Identity of a deck built from no catalog at all
EMPTY_DECK_IDENTITY = "empty"


@dataclass(frozen=True, slots=True)
class Deck:
    """
    An ordered library of card tokens.

    INVARIANT: len(tokens) equals the sum of the source catalog's counts.

    Attributes:
        tokens: Every physical copy, in catalog expansion order
        identity: Digest of the source catalog; equal identities mean
            interchangeable decks
    """

    tokens: tuple[CardToken, ...] = ()
    identity: str = EMPTY_DECK_IDENTITY

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[CardToken]:
        return iter(self.tokens)

    def __getitem__(self, index: int) -> CardToken:
        return self.tokens[index]

    @property
    def size(self) -> int:
        """Total cards in the deck."""
        return len(self.tokens)

    def count(self, category: CardCategory) -> int:
        """Number of tokens tagged with `category`."""
        return sum(1 for token in self.tokens if token.has(category))


@dataclass(frozen=True, slots=True)
class CatalogSummary:
    """
    Scalar summaries of a catalog.

    A multi-category card counts toward each of its tags, so category
    counts may add up to more than deck_size.
    """

    deck_size: int = 0
    category_counts: dict[CardCategory, int] = field(default_factory=dict)
    multi_category_tokens: int = 0

    def count(self, category: CardCategory) -> int:
        """Population of a category, 0 if absent."""
        return self.category_counts.get(category, 0)


# One shuffled permutation of a deck
Sample = tuple[CardToken, ...]


@dataclass(frozen=True, slots=True)
class SampleBatch:
    """
    Shuffled permutations of one deck, reused across repeated queries.

    Attributes:
        deck_identity: Identity of the deck every sample was drawn from
        samples: The permutations, in generation order
    """

    deck_identity: str
    samples: tuple[Sample, ...] = ()

    @property
    def count(self) -> int:
        """Number of samples in the batch."""
        return len(self.samples)

    def slice(self, start: int, end: int) -> tuple[Sample, ...]:
        """Samples in [start, end), clamped to the batch."""
        start = max(start, 0)
        end = min(end, len(self.samples))
        return self.samples[start:end]
