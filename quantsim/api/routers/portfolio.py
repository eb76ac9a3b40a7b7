"""
Portfolio ledger API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from quantsim.core.models.portfolio import PortfolioLedger

from ..dependencies import get_ledger
from ..schemas.api_models import (
    InitializeRequest,
    MetricsResponse,
    PortfolioResponse,
    PortfolioSummaryResponse,
    PositionResponse,
    RevalueRequest,
    SessionResponse,
    TradeRequest,
    TransactionResponse,
    WatchlistRequest,
    WatchlistResponse,
)

router = APIRouter()

LedgerDep = Annotated[PortfolioLedger, Depends(get_ledger)]


def _portfolio_view(ledger: PortfolioLedger) -> PortfolioResponse:
    session = ledger.session
    return PortfolioResponse(
        session=SessionResponse.from_session(session) if session is not None else None,
        portfolio=PortfolioSummaryResponse.from_summary(ledger.summary),
        positions=[PositionResponse.from_position(p) for p in ledger.positions.values()],
    )


@router.post("/initialize", response_model=PortfolioResponse)
def initialize_portfolio(request: InitializeRequest, ledger: LedgerDep) -> PortfolioResponse:
    """Start a new session with the requested capital."""
    ledger.initialize(request.initial_capital)
    return _portfolio_view(ledger)


@router.get("", response_model=PortfolioResponse)
def get_portfolio(ledger: LedgerDep) -> PortfolioResponse:
    """Get session, portfolio totals and positions."""
    return _portfolio_view(ledger)


@router.post("/trades", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def execute_trade(request: TradeRequest, ledger: LedgerDep) -> TransactionResponse:
    """Execute a market trade at the supplied price."""
    transaction = ledger.execute_trade(request.symbol, request.side, request.shares, request.price)
    return TransactionResponse.from_transaction(transaction)


@router.post("/revalue", response_model=PortfolioResponse)
def revalue_positions(request: RevalueRequest, ledger: LedgerDep) -> PortfolioResponse:
    """Mark positions to the posted prices."""
    ledger.revalue_positions(request.prices)
    return _portfolio_view(ledger)


@router.get("/positions/{symbol}", response_model=PositionResponse)
def get_position(symbol: str, ledger: LedgerDep) -> PositionResponse:
    """Get the position held in a symbol."""
    position = ledger.get_position(symbol)
    if position is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"No position in {symbol.upper()}"
        )
    return PositionResponse.from_position(position)


@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(ledger: LedgerDep) -> list[TransactionResponse]:
    """Get the transaction log, newest first."""
    return [TransactionResponse.from_transaction(t) for t in ledger.transactions]


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(ledger: LedgerDep) -> MetricsResponse:
    """Get simplified risk statistics of the trading activity."""
    return MetricsResponse.from_result(ledger.get_portfolio_metrics())


@router.get("/watchlist", response_model=WatchlistResponse)
def get_watchlist(ledger: LedgerDep) -> WatchlistResponse:
    """Get the watched symbols."""
    return WatchlistResponse(symbols=list(ledger.watchlist))


@router.post("/watchlist", response_model=WatchlistResponse)
def add_to_watchlist(request: WatchlistRequest, ledger: LedgerDep) -> WatchlistResponse:
    """Watch a symbol; watching it twice is a no-op."""
    ledger.add_to_watchlist(request.symbol)
    return WatchlistResponse(symbols=list(ledger.watchlist))


@router.delete("/watchlist/{symbol}", response_model=WatchlistResponse)
def remove_from_watchlist(symbol: str, ledger: LedgerDep) -> WatchlistResponse:
    """Stop watching a symbol."""
    if not ledger.remove_from_watchlist(symbol):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{symbol.upper()} is not watched"
        )
    return WatchlistResponse(symbols=list(ledger.watchlist))
