"""Player actions and dispatch onto the engine."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Callable

from core.game import engine
from core.game.errors import InvalidActionError
from core.game.rules import DEFAULT_RULES, TableRules
from core.game.state import GameState


class Action(Enum):
    """Actions a caller can request. Values are the wire names."""

    SHOW_BETTING = "showBetting"
    DEAL = "deal"
    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"

    @classmethod
    def parse(cls, value: "str | Action") -> "Action":
        """Resolve a wire name, raising InvalidActionError for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidActionError(value) from None

    @property
    def needs_state(self) -> bool:
        """Check if this action continues an existing round."""
        return self not in (Action.SHOW_BETTING, Action.DEAL)


Handler = Callable[["ActionContext"], GameState]


@dataclass(frozen=True)
class ActionContext:
    """Arguments gathered for a single dispatched action."""

    state: GameState | None
    bet: int | None
    bankroll: int | None
    rng: Random | None
    rules: TableRules

    def resolve_bankroll(self) -> int:
        """The state's bankroll wins over an explicit one, then the table default."""
        if self.state is not None:
            return self.state.bankroll
        if self.bankroll is not None:
            return self.bankroll
        return self.rules.initial_bankroll

    def resolve_bet(self) -> int:
        """Explicit bet, else the previous round's bet, else the table's base bet."""
        if self.bet is not None:
            return self.bet
        if self.state is not None and self.state.current_bet > 0:
            return self.state.current_bet
        return self.rules.base_bet


_HANDLERS: dict[Action, Handler] = {
    Action.SHOW_BETTING: lambda ctx: engine.show_betting(ctx.resolve_bankroll(), ctx.rules),
    Action.DEAL: lambda ctx: engine.deal(ctx.resolve_bet(), ctx.resolve_bankroll(), ctx.rng),
    Action.HIT: lambda ctx: engine.hit(ctx.state),
    Action.STAND: lambda ctx: engine.stand(ctx.state, ctx.rules),
    Action.DOUBLE: lambda ctx: engine.double_down(ctx.state, ctx.rules),
}


def apply_action(
    action: "str | Action",
    state: GameState | None = None,
    bet: int | None = None,
    bankroll: int | None = None,
    rng: Random | None = None,
    rules: TableRules = DEFAULT_RULES,
) -> GameState:
    """
    Run one action and return the next state.

    Args:
        action: Action or its wire name
        state: Current state, required for hit, stand and double
        bet: Wager for ``deal``
        bankroll: Chips available when no state is supplied
        rng: Random number generator for the shuffle
        rules: Table rules

    Raises:
        InvalidActionError: Unknown action, or a missing state
        InsufficientFundsError: ``deal`` with a bet over the bankroll
    """
    action = Action.parse(action)
    if action.needs_state and state is None:
        raise InvalidActionError(action.value, "a game state is required")

    handler = _HANDLERS[action]
    return handler(ActionContext(state, bet, bankroll, rng, rules))
