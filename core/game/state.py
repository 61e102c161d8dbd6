"""Game status enumerations and the immutable game state snapshot."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from core.cards import Card
from core.hand import Hand


class GameStatus(Enum):
    """
    Externally observable round phases.

    Flow: BETTING → PLAYING → GAME_OVER. The dealer's play-out happens inside
    the stand transition and never appears in a snapshot.
    """

    BETTING = "betting"
    PLAYING = "playing"
    GAME_OVER = "gameOver"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Outcome(Enum):
    """Round outcome from the player's point of view."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a single round.

    The caller holds this value and passes it back with every action; the
    engine returns a new snapshot and never mutates the one it was given.
    ``deck`` is a stack: cards are drawn from its end.
    """

    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    deck: tuple[Card, ...] = ()
    game_status: GameStatus = GameStatus.BETTING
    outcome: Outcome | None = None
    can_double: bool = False
    bankroll: int = 0
    current_bet: int = 0
    is_doubled: bool = False

    def __post_init__(self) -> None:
        """Validate the outcome/status pairing."""
        if (self.outcome is None) == (self.game_status == GameStatus.GAME_OVER):
            raise ValueError("outcome must be set exactly when the game is over")
        if self.bankroll < 0:
            raise ValueError("bankroll cannot be negative")

    def evolve(self, **changes: Any) -> "GameState":
        """Return a copy of this state with ``changes`` applied."""
        return replace(self, **changes)

    @property
    def is_over(self) -> bool:
        """Check if the round has been settled."""
        return self.game_status == GameStatus.GAME_OVER

    @property
    def cards_in_play(self) -> int:
        """Cards accounted for this round (deck plus both hands)."""
        return len(self.deck) + len(self.player_hand) + len(self.dealer_hand)
