"""
Portfolio ledger interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING

from quantsim.core.enums import TradeSide

if TYPE_CHECKING:
    from quantsim.core.models.portfolio_metrics import PortfolioMetricsResult
    from quantsim.core.models.position import Position
    from quantsim.core.models.transaction import Transaction


class IPortfolioLedger(ABC):
    """Abstract interface for a simulated trading ledger."""

    @abstractmethod
    def initialize(self, initial_capital: float | Decimal) -> None:
        """Start a new session with the given capital."""
        pass

    @abstractmethod
    def execute_trade(
        self, symbol: str, side: TradeSide | str, shares: int, price: float | Decimal
    ) -> "Transaction":
        """Execute a market trade at the supplied price."""
        pass

    @abstractmethod
    def revalue_positions(self, price_updates: Mapping[str, float | Decimal]) -> list[str]:
        """Mark held positions to new prices without trading."""
        pass

    @abstractmethod
    def get_position(self, symbol: str) -> "Position | None":
        """Look up the position held in a symbol."""
        pass

    @abstractmethod
    def get_portfolio_metrics(self) -> "PortfolioMetricsResult":
        """Compute simplified risk statistics."""
        pass
