"""Errors raised by the game engine."""


class GameError(Exception):
    """Base class for engine errors."""


class InvalidActionError(GameError):
    """The requested action is not one the engine knows, or lacks a state."""

    def __init__(self, action: object, reason: str | None = None) -> None:
        self.action = action
        message = f"Invalid action: {action}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InsufficientFundsError(GameError):
    """A bet exceeds the available bankroll."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Insufficient funds: bet {required} exceeds bankroll {available}")


class DeckExhaustedError(GameError, IndexError):
    """A draw was attempted on an empty deck. Unreachable with a single 52-card deck."""

    def __init__(self) -> None:
        super().__init__("Cannot draw from empty deck")
