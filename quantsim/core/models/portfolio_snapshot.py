"""
Serializable ledger snapshot.

A snapshot is the complete ledger state (session, summary, positions,
transactions newest first, watchlist and the day-change baseline). Restoring
it rebuilds the ledger directly, without replaying transactions.
"""

from collections import deque
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from quantsim.core.constants import SNAPSHOT_FORMAT_VERSION
from quantsim.core.enums import TradeSide
from quantsim.core.exceptions.ledger import ValidationError
from quantsim.core.models.position import Position
from quantsim.core.models.session import PortfolioSummary, Session
from quantsim.core.models.transaction import Transaction
from quantsim.core.utils.validation import validate_symbol

if TYPE_CHECKING:
    from .portfolio_core import PortfolioLedgerCore


class SessionRecord(BaseModel):
    initial_capital: Decimal = Field(..., gt=0)
    start_date: datetime


class PortfolioRecord(BaseModel):
    cash: Decimal = Field(..., ge=0)
    total_value: Decimal
    total_return: Decimal
    total_return_percent: Decimal
    day_change: Decimal = Decimal("0")
    day_change_percent: Decimal = Decimal("0")


class PositionRecord(BaseModel):
    symbol: str
    shares: int = Field(..., gt=0)
    avg_price: Decimal = Field(..., gt=0)
    current_price: Decimal = Field(..., gt=0)
    market_value: Decimal
    total_return: Decimal
    total_return_percent: Decimal


class TransactionRecord(BaseModel):
    id: str
    symbol: str
    side: TradeSide
    shares: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)
    total: Decimal
    timestamp: datetime


class LedgerSnapshot(BaseModel):
    """Persistable record of a ledger."""

    version: int = SNAPSHOT_FORMAT_VERSION
    session: SessionRecord | None = None
    portfolio: PortfolioRecord = Field(
        default_factory=lambda: PortfolioRecord(
            cash=Decimal("0"),
            total_value=Decimal("0"),
            total_return=Decimal("0"),
            total_return_percent=Decimal("0"),
        )
    )
    positions: list[PositionRecord] = Field(default_factory=list)
    transactions: list[TransactionRecord] = Field(default_factory=list)
    watchlist: list[str] = Field(default_factory=list)
    day_open_value: Decimal = Decimal("0")
    day_open_date: date | None = None


def capture_snapshot(core: "PortfolioLedgerCore") -> LedgerSnapshot:
    """Copy the core state into a snapshot."""
    with core.lock:
        session = core.session
        summary = core.summary
        return LedgerSnapshot(
            session=(
                SessionRecord(
                    initial_capital=session.initial_capital, start_date=session.start_date
                )
                if session is not None
                else None
            ),
            portfolio=PortfolioRecord(
                cash=core.cash,
                total_value=summary.total_value,
                total_return=summary.total_return,
                total_return_percent=summary.total_return_percent,
                day_change=summary.day_change,
                day_change_percent=summary.day_change_percent,
            ),
            positions=[
                PositionRecord(
                    symbol=position.symbol,
                    shares=position.shares,
                    avg_price=position.avg_price,
                    current_price=position.current_price,
                    market_value=position.market_value,
                    total_return=position.total_return,
                    total_return_percent=position.total_return_percent,
                )
                for position in core.positions.values()
            ],
            transactions=[
                TransactionRecord(
                    id=transaction.id,
                    symbol=transaction.symbol,
                    side=transaction.side,
                    shares=transaction.shares,
                    price=transaction.price,
                    total=transaction.total,
                    timestamp=transaction.timestamp,
                )
                for transaction in core.transactions
            ],
            watchlist=list(core.watchlist),
            day_open_value=core.day_open_value,
            day_open_date=core.day_open_date,
        )


def restore_snapshot(core: "PortfolioLedgerCore", snapshot: LedgerSnapshot) -> None:
    """Replace the core state with the snapshot contents.

    Everything is rebuilt first and assigned afterwards, so an invalid
    snapshot leaves the core untouched. Symbols are normalized as on input, so
    a position recorded as ``"aapl"`` is held under ``"AAPL"``.

    Raises:
        ValidationError: If the snapshot version is unsupported or its records
            are inconsistent
    """
    if snapshot.version != SNAPSHOT_FORMAT_VERSION:
        raise ValidationError(
            f"Unsupported snapshot version {snapshot.version}, expected {SNAPSHOT_FORMAT_VERSION}"
        )

    session = (
        Session(
            initial_capital=snapshot.session.initial_capital,
            start_date=snapshot.session.start_date,
        )
        if snapshot.session is not None
        else None
    )
    positions = {
        validate_symbol(record.symbol): Position(
            symbol=validate_symbol(record.symbol),
            shares=record.shares,
            avg_price=record.avg_price,
            current_price=record.current_price,
        )
        for record in snapshot.positions
    }
    if len(positions) != len(snapshot.positions):
        raise ValidationError("Snapshot contains duplicate positions")
    transactions = deque(
        Transaction(
            id=record.id,
            symbol=validate_symbol(record.symbol),
            side=record.side,
            shares=record.shares,
            price=record.price,
            total=record.total,
            timestamp=record.timestamp,
        )
        for record in snapshot.transactions
    )
    watchlist = list(dict.fromkeys(validate_symbol(symbol) for symbol in snapshot.watchlist))
    if session is None and (positions or transactions):
        raise ValidationError("Snapshot without a session cannot hold positions or transactions")

    record = snapshot.portfolio
    summary = PortfolioSummary(
        cash=record.cash,
        total_value=record.total_value,
        total_return=record.total_return,
        total_return_percent=record.total_return_percent,
        day_change=record.day_change,
        day_change_percent=record.day_change_percent,
    )

    with core.lock:
        core.session = session
        core.cash = record.cash
        core.positions = positions
        core.transactions = transactions
        core.watchlist = watchlist
        core.summary = summary
        core.day_open_value = snapshot.day_open_value
        core.day_open_date = snapshot.day_open_date
        if session is not None:
            core.refresh_summary()
