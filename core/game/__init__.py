"""Game engine and state management."""

from core.game.actions import Action, apply_action
from core.game.engine import deal, determine_outcome, double_down, hit, show_betting, stand
from core.game.errors import (
    DeckExhaustedError,
    GameError,
    InsufficientFundsError,
    InvalidActionError,
)
from core.game.rules import DEFAULT_RULES, TableRules
from core.game.state import GameState, GameStatus, Outcome

__all__ = [
    "Action",
    "apply_action",
    "deal",
    "determine_outcome",
    "double_down",
    "hit",
    "show_betting",
    "stand",
    "DeckExhaustedError",
    "GameError",
    "InsufficientFundsError",
    "InvalidActionError",
    "DEFAULT_RULES",
    "TableRules",
    "GameState",
    "GameStatus",
    "Outcome",
]
