"""
Session and portfolio summary models.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from quantsim.core.exceptions.ledger import ValidationError
from quantsim.core.models.position import Position
from quantsim.core.types.financial import ZERO, percent_of


@dataclass(frozen=True)
class Session:
    """Starting capital and start time of one simulated trading session."""

    initial_capital: Decimal
    start_date: datetime

    def __post_init__(self) -> None:
        if self.initial_capital <= ZERO:
            raise ValidationError(
                f"Initial capital must be positive, got {self.initial_capital}"
            )


@dataclass(frozen=True)
class PortfolioSummary:
    """Portfolio totals derived from cash, positions and the session capital.

    Never stored on its own: the ledger rebuilds it with ``compute`` at the end
    of every mutating operation.
    """

    cash: Decimal
    total_value: Decimal
    total_return: Decimal
    total_return_percent: Decimal
    day_change: Decimal = ZERO
    day_change_percent: Decimal = ZERO

    @classmethod
    def empty(cls) -> "PortfolioSummary":
        """Summary of a ledger that has no session yet."""
        return cls(cash=ZERO, total_value=ZERO, total_return=ZERO, total_return_percent=ZERO)

    @classmethod
    def compute(
        cls,
        cash: Decimal,
        positions: Iterable[Position],
        initial_capital: Decimal,
        day_open_value: Decimal,
    ) -> "PortfolioSummary":
        """Derive totals from the current holdings.

        Args:
            cash: Cash balance
            positions: Active positions
            initial_capital: Session starting capital
            day_open_value: Total value at the start of the current day

        Returns:
            Fresh summary
        """
        total_value = cash + sum((position.market_value for position in positions), ZERO)
        total_return = total_value - initial_capital
        day_change = total_value - day_open_value
        return cls(
            cash=cash,
            total_value=total_value,
            total_return=total_return,
            total_return_percent=percent_of(total_return, initial_capital),
            day_change=day_change,
            day_change_percent=percent_of(day_change, day_open_value),
        )
