"""Blackjack state-transition engine."""

import logging
from random import Random

from transitions import Machine

from core.cards import Card, create_deck, shuffle
from core.hand import Hand
from core.game.errors import DeckExhaustedError, InsufficientFundsError
from core.game.rules import DEFAULT_RULES, TableRules
from core.game.state import GameState, GameStatus, Outcome

logger = logging.getLogger(__name__)

# Internal only: the dealer plays out synchronously inside ``stand``.
DEALER_TURN = "dealerTurn"

STATES = [GameStatus.BETTING.value, GameStatus.PLAYING.value, DEALER_TURN, GameStatus.GAME_OVER.value]

TRANSITIONS = [
    {"trigger": "show_betting", "source": "*", "dest": "betting"},
    {"trigger": "deal", "source": "*", "dest": "playing"},
    {"trigger": "hit", "source": "playing", "dest": "playing"},
    {"trigger": "double", "source": "playing", "dest": "playing"},
    {"trigger": "bust", "source": "playing", "dest": "gameOver"},
    {"trigger": "stand", "source": "playing", "dest": DEALER_TURN},
    {"trigger": "settle", "source": DEALER_TURN, "dest": "gameOver"},
]

# Declarative status flow, shared by every snapshot; holds no model.
_flow = Machine(
    model=None,
    states=STATES,
    transitions=TRANSITIONS,
    initial="betting",
    auto_transitions=False,
)


def _allows(status: GameStatus, trigger: str) -> bool:
    """Check if ``trigger`` is legal from ``status``."""
    return trigger in _flow.get_triggers(status.value)


def _advance(status: GameStatus, *triggers: str) -> GameStatus:
    """Follow ``triggers`` from ``status`` and return the resulting observable status."""
    current = status.value
    for trigger in triggers:
        moves = _flow.get_transitions(trigger=trigger, source=current)
        if not moves:
            raise RuntimeError(f"No '{trigger}' transition from {current}")
        current = moves[0].dest
    return GameStatus(current)


def _draw(deck: tuple[Card, ...]) -> tuple[Card, tuple[Card, ...]]:
    """Pop the top (last) card off the deck."""
    if not deck:
        raise DeckExhaustedError()
    return deck[-1], deck[:-1]


def determine_outcome(player: Hand, dealer: Hand) -> Outcome:
    """
    Compare final player and dealer hands.

    A busted player always loses, even if the dealer also busts. Otherwise a
    busted dealer loses, and remaining hands are compared on score.
    """
    if player.is_busted:
        return Outcome.LOSE
    if dealer.is_busted:
        return Outcome.WIN
    if player.score > dealer.score:
        return Outcome.WIN
    if player.score < dealer.score:
        return Outcome.LOSE
    return Outcome.PUSH


def _settle(state: GameState, outcome: Outcome, status: GameStatus) -> GameState:
    """Reveal the dealer, record the outcome and pay or collect the bet."""
    if outcome == Outcome.WIN:
        bankroll = state.bankroll + state.current_bet
    elif outcome == Outcome.LOSE:
        bankroll = state.bankroll - state.current_bet
    else:
        bankroll = state.bankroll

    logger.debug(
        "Round settled: %s (player %d, dealer %d, bet %d, bankroll %d -> %d)",
        outcome.value,
        state.player_hand.score,
        state.dealer_hand.revealed().score,
        state.current_bet,
        state.bankroll,
        bankroll,
    )

    return state.evolve(
        dealer_hand=state.dealer_hand.revealed(),
        game_status=status,
        outcome=outcome,
        can_double=False,
        bankroll=bankroll,
    )


def show_betting(bankroll: int, rules: TableRules = DEFAULT_RULES) -> GameState:
    """Return an empty table waiting for a bet."""
    return GameState(
        game_status=_advance(GameStatus.BETTING, "show_betting"),
        bankroll=bankroll,
        current_bet=rules.base_bet,
    )


def deal(bet: int, bankroll: int, rng: Random | None = None) -> GameState:
    """
    Start a round from a fresh shuffled deck.

    Cards are drawn player, player, dealer, dealer; the dealer's second card
    stays face down.

    Args:
        bet: Wager for this round
        bankroll: Chips available to the player
        rng: Random number generator for the shuffle

    Raises:
        InsufficientFundsError: If ``bet`` exceeds ``bankroll``
        ValueError: If ``bet`` is not positive
    """
    if bet <= 0:
        raise ValueError("Bet must be positive")
    if bet > bankroll:
        raise InsufficientFundsError(required=bet, available=bankroll)

    deck = tuple(shuffle(create_deck(), rng))
    player_cards = []
    dealer_cards = []
    for hand_cards in (player_cards, player_cards, dealer_cards, dealer_cards):
        card, deck = _draw(deck)
        hand_cards.append(card)

    return GameState(
        player_hand=Hand.from_cards(player_cards),
        dealer_hand=Hand.from_cards(dealer_cards, has_hidden_card=True),
        deck=deck,
        game_status=_advance(GameStatus.BETTING, "deal"),
        can_double=bet * 2 <= bankroll,
        bankroll=bankroll,
        current_bet=bet,
    )


def hit(state: GameState) -> GameState:
    """Deal the player one card. A bust loses the round immediately."""
    if not _allows(state.game_status, "hit"):
        return state

    card, deck = _draw(state.deck)
    state = state.evolve(player_hand=state.player_hand.with_card(card), deck=deck, can_double=False)

    if state.player_hand.is_busted:
        return _settle(state, Outcome.LOSE, _advance(state.game_status, "bust"))
    return state.evolve(game_status=_advance(state.game_status, "hit"))


def stand(state: GameState, rules: TableRules = DEFAULT_RULES) -> GameState:
    """
    End the player's turn and play out the dealer.

    The hole card is revealed and the dealer draws while below
    ``rules.dealer_stands_on``. The round is then settled.
    """
    if not _allows(state.game_status, "stand"):
        return state

    dealer_hand = state.dealer_hand.revealed()
    deck = state.deck
    while dealer_hand.score < rules.dealer_stands_on:
        card, deck = _draw(deck)
        dealer_hand = dealer_hand.with_card(card)

    state = state.evolve(dealer_hand=dealer_hand, deck=deck)
    outcome = determine_outcome(state.player_hand, dealer_hand)
    return _settle(state, outcome, _advance(state.game_status, "stand", "settle"))


def double_down(state: GameState, rules: TableRules = DEFAULT_RULES) -> GameState:
    """
    Double the bet, take exactly one card and stand.

    Only allowed as the first action after the deal. A bust loses the
    doubled bet without the dealer drawing.
    """
    if not state.can_double or not _allows(state.game_status, "double"):
        return state

    card, deck = _draw(state.deck)
    state = state.evolve(
        player_hand=state.player_hand.with_card(card),
        deck=deck,
        current_bet=state.current_bet * 2,
        is_doubled=True,
        can_double=False,
        game_status=_advance(state.game_status, "double"),
    )

    if state.player_hand.is_busted:
        return _settle(state, Outcome.LOSE, _advance(state.game_status, "bust"))
    return stand(state, rules)
