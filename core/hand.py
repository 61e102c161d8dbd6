"""Hand evaluation for blackjack."""

from dataclasses import dataclass, replace
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21


def calculate_score(cards: Iterable[Card]) -> int:
    """
    Calculate the blackjack score of a run of cards.

    Non-ace cards are summed first. Each ace then adds 11 if that keeps the
    running total at or below 21 with every remaining ace counted as 1,
    otherwise 1, so at most one ace is ever counted high.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        else:
            total += card.value

    for remaining in range(aces, 0, -1):
        total += 11 if total + 11 + (remaining - 1) <= BLACKJACK else 1

    return total


def is_busted(score: int) -> bool:
    """Check if a score is over 21."""
    return score > BLACKJACK


@dataclass(frozen=True)
class Hand:
    """
    An immutable blackjack hand.

    ``score`` and ``is_busted`` are always derived from ``cards``. While
    ``has_hidden_card`` is set (dealer hole card face down) only the first
    card counts towards the score.
    """

    cards: tuple[Card, ...] = ()
    has_hidden_card: bool = False

    @classmethod
    def from_cards(cls, cards: Iterable[Card], has_hidden_card: bool = False) -> "Hand":
        """Create a hand from any iterable of cards."""
        return cls(cards=tuple(cards), has_hidden_card=has_hidden_card)

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with ``card`` appended."""
        return replace(self, cards=self.cards + (card,))

    def revealed(self) -> "Hand":
        """Return this hand with the hole card turned face up."""
        if not self.has_hidden_card:
            return self
        return replace(self, has_hidden_card=False)

    @property
    def visible_cards(self) -> tuple[Card, ...]:
        """Cards that count towards the displayed score."""
        if self.has_hidden_card:
            return self.cards[:1]
        return self.cards

    @property
    def score(self) -> int:
        """Return the blackjack score of the visible cards."""
        return calculate_score(self.visible_cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (score > 21)."""
        return is_busted(self.score)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        shown = [str(card) for card in self.visible_cards]
        if self.has_hidden_card:
            shown.append("??")
        suffix = "(BUST)" if self.is_busted else f"({self.score})"
        return f"{' '.join(shown)} {suffix}"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, score={self.score})"
