"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardData(WireModel):
    """Serialized card."""

    rank: str = Field(..., description="A, 2-10, J, Q or K")
    suit: str = Field(..., description="♠, ♣, ♥, ♦ or S, C, H, D")
    code: str | None = Field(default=None, description="Card code such as 'AS'; output only")


class HandData(WireModel):
    """Serialized hand. ``score`` and ``isBusted`` are recomputed, never trusted."""

    cards: list[CardData] = []
    score: int = 0
    is_busted: bool = False
    has_hidden_card: bool = False


class GameStateData(WireModel):
    """Serialized game state, round-tripped by the client."""

    player_hand: HandData
    dealer_hand: HandData
    deck: list[CardData] = []
    game_status: Literal["betting", "playing", "gameOver"]
    outcome: Literal["win", "lose", "push"] | None = None
    can_double: bool = False
    bankroll: int = Field(..., ge=0)
    current_bet: int = Field(default=0, ge=0)
    is_doubled: bool = False
    signature: str | None = None


class GameRequest(WireModel):
    """Request to apply an action to a game state."""

    action: str = Field(..., description="showBetting, deal, hit, stand or double")
    state: GameStateData | None = None
    bet: int | None = Field(default=None, ge=1, description="Bet amount for deal")
    bankroll: int | None = Field(
        default=None, ge=0, description="Chips available when no state is supplied"
    )


class ErrorResponse(BaseModel):
    """Error payload."""

    detail: str | dict
