"""Card representation, deck construction and shuffling."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Sequence, TypeVar

T = TypeVar("T")


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    CLUBS = auto()
    HEARTS = auto()
    DIAMONDS = auto()

    def __str__(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def letter(self) -> str:
        """Single-letter code used in card codes ('S', 'C', 'H', 'D')."""
        return self.name[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Suit":
        """Parse a suit from its symbol or letter."""
        key = symbol.strip().upper()
        for suit in cls:
            if key in (suit.letter, _SUIT_SYMBOLS[suit]):
                return suit
        raise ValueError(f"Invalid suit: {symbol}")


_SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
}


class Rank(Enum):
    """Card ranks with blackjack values."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 1 < self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the fixed point value (face cards = 10). Aces are scored by the hand."""
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @classmethod
    def from_symbol(cls, symbol: str) -> "Rank":
        """Parse a rank from 'A', '2'..'10', 'T', 'J', 'Q' or 'K'."""
        key = symbol.strip().upper()
        if key == "T":
            key = "10"
        for rank in cls:
            if str(rank) == key:
                return rank
        raise ValueError(f"Invalid rank: {symbol}")


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def code(self) -> str:
        """Return the ASCII card code, e.g. 'AS' or '10H'."""
        return f"{self.rank}{self.suit.letter}"

    @property
    def value(self) -> int:
        """Return the fixed point value (ace counts 1 here)."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh' or '10D'."""
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")
        return cls(Rank.from_symbol(s[:-1]), Suit.from_symbol(s[-1]))


def create_deck() -> list[Card]:
    """Return all 52 cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(sequence: Sequence[T], rng: Random | None = None) -> list[T]:
    """
    Return a shuffled copy of ``sequence`` (Fisher-Yates).

    Walks from the last index down to 1, swapping each slot with a
    uniformly chosen index in ``[0, i]``. The input is left untouched.

    Args:
        sequence: Items to shuffle
        rng: Random number generator, seeded in tests for reproducibility
    """
    rng = rng or Random()
    shuffled = list(sequence)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
