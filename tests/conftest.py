"""Pytest fixtures for blackjack engine tests."""

import os

# Rate limiting would trip on the API suite's request volume.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from random import Random

from core.cards import Card
from core.hand import Hand
from core.game import GameState, GameStatus


def parse_cards(spec: str) -> list[Card]:
    """Parse a space-separated card list such as '10S AH KD'."""
    return [Card.from_string(s) for s in spec.split()]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def cards():
    """Card list parser."""
    return parse_cards


@pytest.fixture
def make_state():
    """
    Factory for a mid-round state with a stacked deck.

    ``draws`` lists the upcoming cards in the order they will be drawn.
    """

    def _make(
        player: str,
        dealer: str,
        draws: str = "",
        bankroll: int = 1000,
        bet: int = 50,
        can_double: bool = True,
    ) -> GameState:
        return GameState(
            player_hand=Hand.from_cards(parse_cards(player)),
            dealer_hand=Hand.from_cards(parse_cards(dealer), has_hidden_card=True),
            deck=tuple(reversed(parse_cards(draws))),
            game_status=GameStatus.PLAYING,
            can_double=can_double,
            bankroll=bankroll,
            current_bet=bet,
        )

    return _make


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand.from_cards(parse_cards("10S AH"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand.from_cards(parse_cards("AS 6H"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand.from_cards(parse_cards("10S 8H 5D"))
