"""
FastAPI dependencies resolving per-app simulator state.
"""

from fastapi import Request

from quantsim.core.interfaces.data import IPriceProvider
from quantsim.core.models.portfolio import PortfolioLedger


def get_ledger(request: Request) -> PortfolioLedger:
    """Ledger of the running application."""
    return request.app.state.ledger


def get_price_provider(request: Request) -> IPriceProvider:
    """Price provider of the running application."""
    return request.app.state.price_provider
