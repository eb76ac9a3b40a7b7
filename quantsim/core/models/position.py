"""
Position domain model.

Positions are immutable: every buy, sell or revaluation produces a new
Position with its derived valuation fields recomputed on construction.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from quantsim.core.exceptions.ledger import ValidationError
from quantsim.core.types.financial import (
    ZERO,
    blend_cost_basis,
    calculate_notional_value,
    percent_of,
)


@dataclass(frozen=True)
class Position:
    """Aggregated holding of one symbol with a blended average cost basis."""

    symbol: str
    shares: int
    avg_price: Decimal
    current_price: Decimal
    market_value: Decimal = field(init=False)
    total_return: Decimal = field(init=False)
    total_return_percent: Decimal = field(init=False)

    def __post_init__(self) -> None:
        """Validate position data and derive valuation fields."""
        if isinstance(self.shares, bool) or not isinstance(self.shares, int) or self.shares <= 0:
            raise ValidationError(f"Position shares must be a positive integer, got {self.shares}")
        if self.avg_price <= ZERO:
            raise ValidationError(f"Average price must be positive, got {self.avg_price}")
        if self.current_price <= ZERO:
            raise ValidationError(f"Current price must be positive, got {self.current_price}")

        market_value = calculate_notional_value(self.shares, self.current_price)
        total_return = market_value - self.cost_basis
        object.__setattr__(self, "market_value", market_value)
        object.__setattr__(self, "total_return", total_return)
        object.__setattr__(self, "total_return_percent", percent_of(total_return, self.cost_basis))

    @property
    def cost_basis(self) -> Decimal:
        """Total cost of the shares currently held."""
        return calculate_notional_value(self.shares, self.avg_price)

    @classmethod
    def open(cls, symbol: str, shares: int, price: Decimal) -> "Position":
        """Factory method for the first buy of a symbol.

        Args:
            symbol: Ticker symbol
            shares: Shares bought
            price: Execution price, which becomes the cost basis

        Returns:
            New Position marked at the execution price
        """
        return cls(symbol=symbol, shares=shares, avg_price=price, current_price=price)

    def add_shares(self, shares: int, price: Decimal) -> "Position":
        """Return the position after buying more shares at ``price``.

        The cost basis becomes the weighted average of the held and the new shares.
        """
        total = calculate_notional_value(shares, price)
        return Position(
            symbol=self.symbol,
            shares=self.shares + shares,
            avg_price=blend_cost_basis(self.shares, self.avg_price, shares, total),
            current_price=price,
        )

    def remove_shares(self, shares: int, price: Decimal) -> "Position | None":
        """Return the position after selling ``shares`` at ``price``.

        The cost basis is unchanged by a sell. Returns None when nothing is left.

        Raises:
            ValidationError: If more shares are removed than held
        """
        remaining = self.shares - shares
        if remaining < 0:
            raise ValidationError(
                f"Cannot remove {shares} shares from {self.symbol} holding of {self.shares}"
            )
        if remaining == 0:
            return None
        return Position(
            symbol=self.symbol,
            shares=remaining,
            avg_price=self.avg_price,
            current_price=price,
        )

    def marked_to(self, price: Decimal) -> "Position":
        """Return the position revalued at ``price`` with the same cost basis."""
        return Position(
            symbol=self.symbol,
            shares=self.shares,
            avg_price=self.avg_price,
            current_price=price,
        )
