"""Helper methods for the ledger components."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from quantsim.core.enums import TradeSide
from quantsim.core.exceptions.ledger import (
    InsufficientFundsError,
    InsufficientSharesError,
)
from quantsim.core.models.position import Position
from quantsim.core.types.financial import to_float
from quantsim.core.utils.validation import (
    validate_positive,
    validate_share_quantity,
    validate_side,
    validate_symbol,
)


class OrderValidator:
    """Validates trade requests before they touch ledger state."""

    @staticmethod
    def validate_order(
        symbol: Any, side: Any, shares: Any, price: Any
    ) -> tuple[str, TradeSide, int, Decimal]:
        """Validate and normalize trade request parameters.

        Raises:
            ValidationError: If symbol, side or price is invalid
            InvalidTradeQuantityError: If shares is not a positive integer
        """
        symbol = validate_symbol(symbol)
        side = validate_side(side)
        quantity = validate_share_quantity(shares)
        execution_price = validate_positive(price, "price")
        return symbol, side, quantity, execution_price

    @staticmethod
    def check_sufficient_funds(required: Decimal, available: Decimal, operation: str) -> None:
        """Check if sufficient cash is available."""
        if required > available:
            raise InsufficientFundsError(
                required=to_float(required),
                available=to_float(available),
                operation=operation,
            )

    @staticmethod
    def check_sufficient_shares(symbol: str, requested: int, position: Position | None) -> None:
        """Check if enough shares are held to sell."""
        held = position.shares if position is not None else 0
        if position is None or held < requested:
            raise InsufficientSharesError(symbol=symbol, requested=requested, held=held)


class PriceUpdateValidator:
    """Validates revaluation price maps."""

    @staticmethod
    def validate_price_updates(price_updates: Mapping[Any, Any]) -> dict[str, Decimal]:
        """Normalize symbols and validate every price before any position changes.

        Raises:
            ValidationError: If a symbol or a price is invalid
        """
        validated: dict[str, Decimal] = {}
        for symbol, price in price_updates.items():
            normalized = validate_symbol(symbol)
            validated[normalized] = validate_positive(price, f"price for {normalized}")
        return validated
