"""
Technical indicator API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from quantsim.core.constants import DEFAULT_HISTORY_DAYS
from quantsim.core.exceptions.ledger import DataError
from quantsim.core.interfaces.data import IPriceProvider
from quantsim.infrastructure.data.technical_indicators import indicator_snapshot

from ..dependencies import get_price_provider
from ..schemas.api_models import IndicatorRequest, IndicatorSnapshotResponse

router = APIRouter()


@router.post("/snapshot", response_model=IndicatorSnapshotResponse)
def snapshot_from_prices(request: IndicatorRequest) -> IndicatorSnapshotResponse:
    """Latest indicator values for posted closing prices."""
    snapshot = indicator_snapshot(request.prices, request.current_price)
    return IndicatorSnapshotResponse.from_snapshot(snapshot)


@router.get("/{symbol}", response_model=IndicatorSnapshotResponse)
def snapshot_for_symbol(
    symbol: str,
    provider: Annotated[IPriceProvider, Depends(get_price_provider)],
    days: Annotated[int, Query(gt=0, le=1000)] = DEFAULT_HISTORY_DAYS,
) -> IndicatorSnapshotResponse:
    """Latest indicator values over the provider's price history for a symbol."""
    symbol = symbol.strip().upper()
    try:
        history = provider.history(symbol, days)
    except DataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return IndicatorSnapshotResponse.from_snapshot(indicator_snapshot(history), symbol=symbol)
