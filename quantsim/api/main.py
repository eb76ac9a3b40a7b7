"""
FastAPI main application for the trading simulator.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from quantsim.core.exceptions.ledger import (
    LedgerException,
    PortfolioError,
    UninitializedSessionError,
    ValidationError,
)
from quantsim.core.interfaces.data import IPriceProvider
from quantsim.core.models.portfolio import PortfolioLedger
from quantsim.infrastructure.data.price_providers import RandomWalkPriceProvider

from .routers import indicators, portfolio
from .schemas.api_models import ErrorResponse


def _status_for(exc: LedgerException) -> int:
    if isinstance(exc, UninitializedSessionError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, PortfolioError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def ledger_exception_handler(request: Request, exc: LedgerException) -> JSONResponse:
    """Translate domain exceptions into error responses."""
    status_code = _status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    body = ErrorResponse(error=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app(
    ledger: PortfolioLedger | None = None, price_provider: IPriceProvider | None = None
) -> FastAPI:
    """Creates and configures the FastAPI application.

    Args:
        ledger: Ledger served by this app; a fresh uninitialized one by default
        price_provider: Source of price history; a random walk by default
    """
    app = FastAPI(
        title="QuantSim API",
        version="1.0.0",
        description="API for simulated equity trading and technical indicators",
    )

    app.state.ledger = ledger if ledger is not None else PortfolioLedger()
    app.state.price_provider = (
        price_provider if price_provider is not None else RandomWalkPriceProvider()
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Development frontend
            "http://localhost:5173",  # Vite dev server
        ],
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Accept", "Origin"],
    )

    app.add_exception_handler(LedgerException, ledger_exception_handler)

    app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
    app.include_router(indicators.router, prefix="/api/indicators", tags=["indicators"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning API information."""
        return {"message": "QuantSim API", "version": "1.0.0", "status": "running"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
