"""Table rules for the single-deck game."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TableRules:
    """
    Blackjack table rules configuration.

    The dealer draws while below ``dealer_stands_on`` and stands on any total
    at or above it, soft or hard.
    """

    initial_bankroll: int = 1000
    base_bet: int = 50
    dealer_stands_on: int = 17

    def __post_init__(self) -> None:
        """Validate rule values."""
        if self.base_bet < 1:
            raise ValueError("base_bet must be at least 1")
        if self.initial_bankroll < 0:
            raise ValueError("initial_bankroll cannot be negative")
        if not 1 <= self.dealer_stands_on <= 21:
            raise ValueError("dealer_stands_on must be between 1 and 21")


DEFAULT_RULES = TableRules()
