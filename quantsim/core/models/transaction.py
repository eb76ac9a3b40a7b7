"""
Transaction domain model.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from quantsim.core.enums import TradeSide
from quantsim.core.exceptions.ledger import ValidationError
from quantsim.core.types.financial import calculate_notional_value


@dataclass(frozen=True)
class Transaction:
    """Represents an executed trade."""

    id: str
    symbol: str
    side: TradeSide
    shares: int
    price: Decimal
    total: Decimal
    timestamp: datetime

    def __post_init__(self) -> None:
        """Validate transaction data after initialization."""
        if self.shares <= 0:
            raise ValidationError(f"Shares must be positive, got {self.shares}")
        if self.price <= 0:
            raise ValidationError(f"Price must be positive, got {self.price}")
        if self.total != calculate_notional_value(self.shares, self.price):
            raise ValidationError(
                f"Total {self.total} does not match {self.shares} shares at {self.price}"
            )

    @classmethod
    def record(
        cls,
        sequence: int,
        symbol: str,
        side: TradeSide,
        shares: int,
        price: Decimal,
        timestamp: datetime,
    ) -> "Transaction":
        """Create the transaction for the ``sequence``-th execution of a session."""
        return cls(
            id=str(sequence),
            symbol=symbol,
            side=side,
            shares=shares,
            price=price,
            total=calculate_notional_value(shares, price),
            timestamp=timestamp,
        )

    @property
    def cash_flow(self) -> Decimal:
        """Signed cash movement: negative for buys, positive for sells."""
        return self.total * self.side.cash_flow_sign
