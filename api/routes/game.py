"""Game API endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from api.rate_limit import DEFAULT_LIMIT, limiter
from api.schemas import CardData, ErrorResponse, GameRequest, GameStateData, HandData
from api.signing import get_state_signer
from config import config
from core.cards import Card, Rank, Suit
from core.game import (
    GameState,
    GameStatus,
    InsufficientFundsError,
    InvalidActionError,
    Outcome,
    TableRules,
    apply_action,
)
from core.hand import Hand

logger = logging.getLogger(__name__)

router = APIRouter()


def _table_rules() -> TableRules:
    """Build table rules from the game configuration."""
    return TableRules(
        initial_bankroll=config.game.initial_bankroll,
        base_bet=config.game.base_bet,
        dealer_stands_on=config.game.dealer_stands_on,
    )


def _serialize_card(card: Card) -> CardData:
    """Serialize a card."""
    return CardData(rank=str(card.rank), suit=str(card.suit), code=card.code)


def _deserialize_card(data: CardData) -> Card:
    """Deserialize a card; the ``code`` field is ignored."""
    return Card(Rank.from_symbol(data.rank), Suit.from_symbol(data.suit))


def _serialize_hand(hand: Hand) -> HandData:
    """Serialize a hand with its derived score."""
    return HandData(
        cards=[_serialize_card(c) for c in hand.cards],
        score=hand.score,
        is_busted=hand.is_busted,
        has_hidden_card=hand.has_hidden_card,
    )


def _deserialize_hand(data: HandData) -> Hand:
    """Deserialize a hand, discarding the client's score and bust flag."""
    return Hand.from_cards(
        (_deserialize_card(c) for c in data.cards),
        has_hidden_card=data.has_hidden_card,
    )


def _serialize_state(state: GameState) -> GameStateData:
    """Serialize game state for the client."""
    return GameStateData(
        player_hand=_serialize_hand(state.player_hand),
        dealer_hand=_serialize_hand(state.dealer_hand),
        deck=[_serialize_card(c) for c in state.deck],
        game_status=state.game_status.value,
        outcome=state.outcome.value if state.outcome else None,
        can_double=state.can_double,
        bankroll=state.bankroll,
        current_bet=state.current_bet,
        is_doubled=state.is_doubled,
    )


def _deserialize_state(data: GameStateData) -> GameState:
    """
    Restore a game state sent by the client.

    Raises:
        ValueError: If a card is malformed, a card appears twice, or the
            state's fields contradict each other
    """
    state = GameState(
        player_hand=_deserialize_hand(data.player_hand),
        dealer_hand=_deserialize_hand(data.dealer_hand),
        deck=tuple(_deserialize_card(c) for c in data.deck),
        game_status=GameStatus(data.game_status),
        outcome=Outcome(data.outcome) if data.outcome else None,
        can_double=data.can_double,
        bankroll=data.bankroll,
        current_bet=data.current_bet,
        is_doubled=data.is_doubled,
    )
    all_cards = [*state.deck, *state.player_hand, *state.dealer_hand]
    if len(set(all_cards)) != len(all_cards):
        raise ValueError("Duplicate cards in game state")
    return state


def _signed_payload(data: GameStateData) -> dict[str, Any]:
    """The part of a serialized state covered by its signature."""
    return data.model_dump(mode="json", by_alias=True, exclude={"signature"})


def _load_state(data: GameStateData) -> GameState:
    """Deserialize and, when signing is enabled, authenticate a client state."""
    try:
        state = _deserialize_state(data)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid game state: {exc}") from exc

    if config.security.sign_state:
        # Verify against the normalized form so client-side derived fields can't matter.
        normalized = _serialize_state(state)
        if not get_state_signer().verify(_signed_payload(normalized), data.signature):
            raise HTTPException(status_code=400, detail="Invalid game state: bad signature")
    return state


def _dump_state(state: GameState) -> GameStateData:
    """Serialize a state for the response, signing it when enabled."""
    data = _serialize_state(state)
    if config.security.sign_state:
        data.signature = get_state_signer().sign(_signed_payload(data))
    return data


@router.post(
    "",
    response_model=GameStateData,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(DEFAULT_LIMIT)
async def game_action(request: Request, body: GameRequest) -> GameStateData:
    """Apply an action to the supplied state and return the next state."""
    state = _load_state(body.state) if body.state is not None else None

    try:
        new_state = apply_action(
            body.action,
            state=state,
            bet=body.bet,
            bankroll=body.bankroll,
            rules=_table_rules(),
        )
    except InsufficientFundsError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "message": str(exc),
                "required": exc.required,
                "available": exc.available,
            },
        ) from exc
    except InvalidActionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info(
        "action=%s status=%s outcome=%s bankroll=%d",
        body.action,
        new_state.game_status.value,
        new_state.outcome.value if new_state.outcome else "-",
        new_state.bankroll,
    )
    return _dump_state(new_state)
