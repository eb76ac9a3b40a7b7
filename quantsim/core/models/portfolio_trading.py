"""
Portfolio trading operations.

This module handles buy/sell execution against the ledger cash balance.
Every trade computes its complete outcome (new cash, replacement position,
transaction record) before writing anything, then applies all of it while
holding the core lock.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from quantsim.core.enums import TradeSide
from quantsim.core.models.position import Position
from quantsim.core.models.transaction import Transaction
from quantsim.core.types.financial import calculate_notional_value

from .portfolio_helpers import OrderValidator

if TYPE_CHECKING:
    from .portfolio_core import PortfolioLedgerCore


class PortfolioTrading:
    """Portfolio trading operations.

    Handles buy/sell operations, trade recording and position updates.
    """

    def __init__(self, ledger_core: "PortfolioLedgerCore") -> None:
        """Initialize with ledger core state.

        Args:
            ledger_core: The ledger core state to execute trades against
        """
        self.core = ledger_core

    def execute(self, symbol: Any, side: Any, shares: Any, price: Any) -> Transaction:
        """Execute a market trade at the supplied price.

        Args:
            symbol: Ticker symbol
            side: BUY or SELL
            shares: Positive whole number of shares
            price: Positive execution price

        Returns:
            The recorded transaction

        Raises:
            UninitializedSessionError: If no session was started
            InvalidTradeQuantityError: If shares is not a positive integer
            ValidationError: If symbol, side or price is invalid
            InsufficientFundsError: If a buy costs more than the cash balance
            InsufficientSharesError: If a sell exceeds the shares held
        """
        with self.core.lock:
            self.core.require_session("trade execution")
            symbol, side, quantity, execution_price = OrderValidator.validate_order(
                symbol, side, shares, price
            )
            if side.is_buy:
                return self.buy(symbol, quantity, execution_price)
            return self.sell(symbol, quantity, execution_price)

    def buy(self, symbol: str, shares: int, price: Decimal) -> Transaction:
        """Buy shares, opening a position or blending the existing cost basis."""
        with self.core.lock:
            total = calculate_notional_value(shares, price)
            OrderValidator.check_sufficient_funds(
                total, self.core.cash, f"buying {shares} {symbol} at {price}"
            )

            existing = self.core.positions.get(symbol)
            if existing is None:
                position = Position.open(symbol, shares, price)
            else:
                position = existing.add_shares(shares, price)

            transaction = self._record(symbol, TradeSide.BUY, shares, price)
            self._apply(self.core.cash - total, symbol, position, transaction)
            return transaction

    def sell(self, symbol: str, shares: int, price: Decimal) -> Transaction:
        """Sell held shares; the position is removed once no shares remain."""
        with self.core.lock:
            existing = self.core.positions.get(symbol)
            OrderValidator.check_sufficient_shares(symbol, shares, existing)

            total = calculate_notional_value(shares, price)
            position = existing.remove_shares(shares, price)

            transaction = self._record(symbol, TradeSide.SELL, shares, price)
            self._apply(self.core.cash + total, symbol, position, transaction)
            return transaction

    def _record(self, symbol: str, side: TradeSide, shares: int, price: Decimal) -> Transaction:
        return Transaction.record(
            sequence=self.core.next_sequence,
            symbol=symbol,
            side=side,
            shares=shares,
            price=price,
            timestamp=self.core.clock(),
        )

    def _apply(
        self,
        cash: Decimal,
        symbol: str,
        position: Position | None,
        transaction: Transaction,
    ) -> None:
        """Write a fully computed trade outcome into the core."""
        self.core.cash = cash
        if position is None:
            del self.core.positions[symbol]
        else:
            self.core.positions[symbol] = position
        self.core.transactions.appendleft(transaction)
        self.core.refresh_summary()
