"""
Portfolio ledger core state management.

This module holds the single source of truth for a session: cash, positions,
the transaction log and the derived summary.
"""

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal

from quantsim.core.exceptions.ledger import UninitializedSessionError
from quantsim.core.models.position import Position
from quantsim.core.models.session import PortfolioSummary, Session
from quantsim.core.models.transaction import Transaction
from quantsim.core.types.financial import ZERO


def utc_now() -> datetime:
    """Default ledger clock."""
    return datetime.now(UTC)


@dataclass
class PortfolioLedgerCore:
    """Core ledger state.

    Thread Safety:
        All state-modifying operations of the ledger components run while
        holding the internal RLock, so the funds/shares sufficiency checks and
        the writes that follow them form one atomic step. Read accessors of
        the ledger take the same lock and never observe a half-applied trade.
    """

    clock: Callable[[], datetime] = utc_now
    session: Session | None = None
    cash: Decimal = ZERO
    positions: dict[str, Position] = field(default_factory=dict)
    transactions: deque[Transaction] = field(default_factory=deque)
    watchlist: list[str] = field(default_factory=list)
    summary: PortfolioSummary = field(default_factory=PortfolioSummary.empty)
    day_open_value: Decimal = ZERO
    day_open_date: date | None = None
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def next_sequence(self) -> int:
        """Execution sequence number of the next transaction in this session."""
        return len(self.transactions) + 1

    def require_session(self, operation: str) -> Session:
        """Return the active session.

        Raises:
            UninitializedSessionError: If no session was started
        """
        if self.session is None:
            raise UninitializedSessionError(operation)
        return self.session

    def reset(self, session: Session) -> None:
        """Start ``session``: cash, positions and transactions reset together."""
        with self._lock:
            self.session = session
            self.cash = session.initial_capital
            self.positions = {}
            self.transactions = deque()
            self.day_open_value = session.initial_capital
            self.day_open_date = session.start_date.date()
            self.summary = PortfolioSummary.compute(
                self.cash, (), session.initial_capital, self.day_open_value
            )

    def refresh_summary(self) -> PortfolioSummary:
        """Recompute portfolio totals from cash and positions.

        Rolls the day-open baseline to the previous total value when the clock
        has moved to a new calendar day since the last recompute.
        """
        with self._lock:
            session = self.require_session("portfolio revaluation")
            today = self.clock().date()
            if self.day_open_date != today:
                self.day_open_value = self.summary.total_value
                self.day_open_date = today

            self.summary = PortfolioSummary.compute(
                self.cash,
                self.positions.values(),
                session.initial_capital,
                self.day_open_value,
            )
            return self.summary
