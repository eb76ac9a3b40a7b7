"""
Portfolio mark-to-market revaluation.

This module re-prices held positions from externally supplied quotes without
recording trades.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from .portfolio_helpers import PriceUpdateValidator

if TYPE_CHECKING:
    from .portfolio_core import PortfolioLedgerCore


class PortfolioValuation:
    """Portfolio revaluation.

    Cost basis is never touched here; only current price and the derived
    market value and returns change.
    """

    def __init__(self, ledger_core: "PortfolioLedgerCore") -> None:
        """Initialize with ledger core state.

        Args:
            ledger_core: The ledger core state to revalue
        """
        self.core = ledger_core

    def revalue(self, price_updates: Mapping[Any, Any]) -> list[str]:
        """Mark positions to new prices.

        Positions whose symbol is absent from ``price_updates``, or whose price
        is unchanged, are left as they are. Symbols that are not held are ignored.

        Args:
            price_updates: Mapping of symbol to current price

        Returns:
            Symbols whose position was re-priced

        Raises:
            UninitializedSessionError: If no session was started
            ValidationError: If any symbol or price is invalid (nothing is changed)
        """
        with self.core.lock:
            self.core.require_session("position revaluation")
            prices = PriceUpdateValidator.validate_price_updates(price_updates)

            repriced = {
                symbol: position.marked_to(prices[symbol])
                for symbol, position in self.core.positions.items()
                if symbol in prices and prices[symbol] != position.current_price
            }

            self.core.positions.update(repriced)
            self.core.refresh_summary()

        if repriced:
            logger.debug(f"Revalued {len(repriced)} positions: {sorted(repriced)}")
        return sorted(repriced)
