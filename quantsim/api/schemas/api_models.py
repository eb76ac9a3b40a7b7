"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from quantsim.core.constants import (
    DEFAULT_INITIAL_CAPITAL,
    MAX_INITIAL_CAPITAL,
    MIN_INITIAL_CAPITAL,
)
from quantsim.core.enums import RSIZone, TradeSide
from quantsim.core.models.portfolio_metrics import PortfolioMetricsResult
from quantsim.core.models.position import Position
from quantsim.core.models.session import PortfolioSummary, Session
from quantsim.core.models.transaction import Transaction
from quantsim.infrastructure.data.technical_indicators import IndicatorSnapshot


class InitializeRequest(BaseModel):
    """Request model for starting a session."""

    initial_capital: float = Field(
        default=DEFAULT_INITIAL_CAPITAL,
        ge=MIN_INITIAL_CAPITAL,
        le=MAX_INITIAL_CAPITAL,
        description="Starting cash balance",
    )


class TradeRequest(BaseModel):
    """Request model for a market trade."""

    symbol: str = Field(..., min_length=1, description="Ticker symbol")
    side: TradeSide = Field(..., description="BUY or SELL")
    shares: int = Field(..., gt=0, description="Whole number of shares")
    price: float = Field(..., gt=0, description="Execution price")

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        """Upper-case and strip the symbol."""
        normalized = v.strip().upper()
        if not normalized:
            raise ValueError("symbol must not be empty")
        return normalized


class RevalueRequest(BaseModel):
    """Request model for mark-to-market revaluation."""

    prices: dict[str, float] = Field(..., description="Current price per symbol")

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v: dict[str, float]) -> dict[str, float]:
        """Reject non-positive prices."""
        for symbol, price in v.items():
            if price <= 0:
                raise ValueError(f"price for {symbol} must be positive")
        return v


class WatchlistRequest(BaseModel):
    symbol: str = Field(..., min_length=1)


class IndicatorRequest(BaseModel):
    """Request model for an indicator snapshot over posted closes."""

    prices: list[float] = Field(default_factory=list, description="Closing prices, oldest first")
    current_price: float | None = Field(default=None, gt=0)


class SessionResponse(BaseModel):
    initial_capital: float
    start_date: datetime

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(initial_capital=float(session.initial_capital), start_date=session.start_date)


class PortfolioSummaryResponse(BaseModel):
    cash: float
    total_value: float
    total_return: float
    total_return_percent: float
    day_change: float
    day_change_percent: float

    @classmethod
    def from_summary(cls, summary: PortfolioSummary) -> "PortfolioSummaryResponse":
        return cls(
            cash=float(summary.cash),
            total_value=float(summary.total_value),
            total_return=float(summary.total_return),
            total_return_percent=float(summary.total_return_percent),
            day_change=float(summary.day_change),
            day_change_percent=float(summary.day_change_percent),
        )


class PositionResponse(BaseModel):
    symbol: str
    shares: int
    avg_price: float
    current_price: float
    market_value: float
    total_return: float
    total_return_percent: float

    @classmethod
    def from_position(cls, position: Position) -> "PositionResponse":
        return cls(
            symbol=position.symbol,
            shares=position.shares,
            avg_price=float(position.avg_price),
            current_price=float(position.current_price),
            market_value=float(position.market_value),
            total_return=float(position.total_return),
            total_return_percent=float(position.total_return_percent),
        )


class TransactionResponse(BaseModel):
    id: str
    symbol: str
    side: TradeSide
    shares: int
    price: float
    total: float
    timestamp: datetime

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            symbol=transaction.symbol,
            side=transaction.side,
            shares=transaction.shares,
            price=float(transaction.price),
            total=float(transaction.total),
            timestamp=transaction.timestamp,
        )


class PortfolioResponse(BaseModel):
    """Response model for the full portfolio view."""

    session: SessionResponse | None
    portfolio: PortfolioSummaryResponse
    positions: list[PositionResponse]


class MetricsResponse(BaseModel):
    sharpe_ratio: float
    volatility: float
    average_cash_flow: float
    variance: float
    max_drawdown: float
    beta: float

    @classmethod
    def from_result(cls, result: PortfolioMetricsResult) -> "MetricsResponse":
        return cls(**result.to_dict())


class WatchlistResponse(BaseModel):
    symbols: list[str]


class MACDValues(BaseModel):
    macd: float
    signal: float
    histogram: float


class BollingerValues(BaseModel):
    upper: float
    middle: float
    lower: float


class IndicatorSnapshotResponse(BaseModel):
    """Response model for the latest indicator values."""

    symbol: str | None = None
    rsi: float
    rsi_zone: RSIZone
    macd: MACDValues
    sma20: float
    ema12: float
    bollinger: BollingerValues

    @classmethod
    def from_snapshot(
        cls, snapshot: IndicatorSnapshot, symbol: str | None = None
    ) -> "IndicatorSnapshotResponse":
        return cls(symbol=symbol, **snapshot.to_dict())


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None
