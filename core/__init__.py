"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Suit, create_deck, shuffle
from core.hand import Hand, calculate_score, is_busted

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "create_deck",
    "shuffle",
    "Hand",
    "calculate_score",
    "is_busted",
]
