"""
Main PortfolioLedger class - orchestrates all ledger components.

This module provides the ledger interface by composing the focused
components: core state, trading, valuation, metrics and snapshots.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from decimal import Decimal

from loguru import logger

from quantsim.core.enums import TradeSide
from quantsim.core.interfaces.portfolio import IPortfolioLedger
from quantsim.core.models.position import Position
from quantsim.core.models.session import PortfolioSummary, Session
from quantsim.core.models.transaction import Transaction
from quantsim.core.utils.decorators import log_ledger_operation
from quantsim.core.utils.validation import validate_positive, validate_symbol

from .portfolio_core import PortfolioLedgerCore, utc_now
from .portfolio_metrics import PortfolioMetrics, PortfolioMetricsResult
from .portfolio_snapshot import LedgerSnapshot, capture_snapshot, restore_snapshot
from .portfolio_trading import PortfolioTrading
from .portfolio_valuation import PortfolioValuation


class PortfolioLedger(IPortfolioLedger):
    """Simulated equity trading ledger for one session.

    Orchestrates ledger operations by composing focused components:
    - PortfolioLedgerCore: State and lock
    - PortfolioTrading: Buy/sell execution
    - PortfolioValuation: Mark-to-market revaluation
    - PortfolioMetrics: Simplified risk statistics

    All mutation goes through the methods below. Positions, transactions and
    summaries handed out are immutable values.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        """Create an uninitialized ledger.

        Args:
            clock: Source of the current UTC time (session start, transaction
                timestamps and the day-change baseline)
        """
        self._core = PortfolioLedgerCore(clock=clock)
        self._trading = PortfolioTrading(self._core)
        self._valuation = PortfolioValuation(self._core)
        self._metrics = PortfolioMetrics(self._core)

    # State accessors
    @property
    def is_initialized(self) -> bool:
        """Check if a session was started."""
        return self._core.session is not None

    @property
    def session(self) -> Session | None:
        """Get the active session."""
        return self._core.session

    @property
    def cash(self) -> Decimal:
        """Get the cash balance."""
        with self._core.lock:
            return self._core.cash

    @property
    def summary(self) -> PortfolioSummary:
        """Get the portfolio totals as of the last operation."""
        with self._core.lock:
            return self._core.summary

    @property
    def positions(self) -> dict[str, Position]:
        """Get a copy of the active positions keyed by symbol."""
        with self._core.lock:
            return dict(self._core.positions)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Get the transaction log, newest first."""
        with self._core.lock:
            return tuple(self._core.transactions)

    @property
    def watchlist(self) -> tuple[str, ...]:
        """Get the watched symbols in insertion order."""
        with self._core.lock:
            return tuple(self._core.watchlist)

    # Ledger operations (IPortfolioLedger)
    @log_ledger_operation
    def initialize(self, initial_capital: float | Decimal) -> None:
        """Start a new session, resetting cash, positions and transactions.

        The session capital bounds are enforced by callers; the ledger only
        requires a positive amount.

        Raises:
            ValidationError: If initial_capital is not positive
        """
        capital = validate_positive(initial_capital, "initial_capital")
        self._core.reset(Session(initial_capital=capital, start_date=self._core.clock()))

    @log_ledger_operation
    def execute_trade(
        self, symbol: str, side: TradeSide | str, shares: int, price: float | Decimal
    ) -> Transaction:
        """Execute a market trade at the supplied price.

        Either the whole update (cash, position, transaction, totals) is
        applied or, when an exception is raised, none of it.

        Returns:
            The recorded transaction
        """
        return self._trading.execute(symbol, side, shares, price)

    def buy(self, symbol: str, shares: int, price: float | Decimal) -> Transaction:
        """Execute a buy order."""
        return self.execute_trade(symbol, TradeSide.BUY, shares, price)

    def sell(self, symbol: str, shares: int, price: float | Decimal) -> Transaction:
        """Execute a sell order."""
        return self.execute_trade(symbol, TradeSide.SELL, shares, price)

    @log_ledger_operation
    def revalue_positions(self, price_updates: Mapping[str, float | Decimal]) -> list[str]:
        """Mark held positions to new prices without trading.

        Returns:
            Symbols whose position was re-priced
        """
        return self._valuation.revalue(price_updates)

    def get_position(self, symbol: str) -> Position | None:
        """Look up the position held in a symbol; None when not held."""
        symbol = validate_symbol(symbol)
        with self._core.lock:
            return self._core.positions.get(symbol)

    def get_portfolio_metrics(self) -> PortfolioMetricsResult:
        """Compute simplified risk statistics from the transaction log."""
        return self._metrics.calculate()

    # Watchlist
    def add_to_watchlist(self, symbol: str) -> bool:
        """Watch a symbol. Returns False if it was already watched."""
        symbol = validate_symbol(symbol)
        with self._core.lock:
            if symbol in self._core.watchlist:
                return False
            self._core.watchlist.append(symbol)
        logger.debug(f"Added {symbol} to watchlist")
        return True

    def remove_from_watchlist(self, symbol: str) -> bool:
        """Stop watching a symbol. Returns False if it was not watched."""
        symbol = validate_symbol(symbol)
        with self._core.lock:
            if symbol not in self._core.watchlist:
                return False
            self._core.watchlist.remove(symbol)
        logger.debug(f"Removed {symbol} from watchlist")
        return True

    # Persistence
    def to_snapshot(self) -> LedgerSnapshot:
        """Capture the full ledger state for an external store."""
        return capture_snapshot(self._core)

    def restore(self, snapshot: LedgerSnapshot) -> None:
        """Replace the ledger state with a previously captured snapshot."""
        restore_snapshot(self._core, snapshot)
        logger.info(
            f"Restored ledger with {len(snapshot.positions)} positions "
            f"and {len(snapshot.transactions)} transactions"
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: LedgerSnapshot, clock: Callable[[], datetime] = utc_now
    ) -> "PortfolioLedger":
        """Build a ledger from a snapshot."""
        ledger = cls(clock=clock)
        ledger.restore(snapshot)
        return ledger
