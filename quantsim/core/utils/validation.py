"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from quantsim.core.constants import MAX_INITIAL_CAPITAL, MIN_INITIAL_CAPITAL
from quantsim.core.enums import TradeSide
from quantsim.core.exceptions.ledger import InvalidTradeQuantityError, ValidationError
from quantsim.core.types.financial import to_decimal


def validate_symbol(symbol: Any, param_name: str = "symbol") -> str:
    """Validate and normalize a ticker symbol.

    Args:
        symbol: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The stripped, upper-cased symbol

    Raises:
        ValidationError: If symbol is not a non-empty string
    """
    if not isinstance(symbol, str):
        raise ValidationError(f"{param_name} must be a string, got {type(symbol).__name__}")
    normalized = symbol.strip().upper()
    if not normalized:
        raise ValidationError(f"{param_name} must not be empty")
    return normalized


def validate_side(side: Any, param_name: str = "side") -> TradeSide:
    """Validate a trade side given as enum or string."""
    if isinstance(side, TradeSide):
        return side
    if isinstance(side, str):
        try:
            return TradeSide.from_string(side)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    raise ValidationError(f"{param_name} must be BUY or SELL, got {side!r}")


def validate_positive(value: Any, param_name: str) -> Decimal:
    """Validate that a numeric value is positive and finite.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value as Decimal

    Raises:
        ValidationError: If value is not a positive finite number
    """
    try:
        amount = to_decimal(value)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise ValidationError(f"{param_name} must be numeric, got {value!r}") from e
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return amount


def validate_share_quantity(shares: Any) -> int:
    """Validate a share count for a trade.

    Integral floats and Decimals such as ``5.0`` are accepted and converted.

    Args:
        shares: Requested number of shares

    Returns:
        The share count as int

    Raises:
        InvalidTradeQuantityError: If shares is not a positive whole number
    """
    if isinstance(shares, bool):
        raise InvalidTradeQuantityError(shares)
    if isinstance(shares, int):
        quantity = shares
    elif isinstance(shares, float | Decimal):
        try:
            if shares != int(shares):
                raise InvalidTradeQuantityError(shares)
        except (ValueError, OverflowError) as e:
            raise InvalidTradeQuantityError(shares) from e
        quantity = int(shares)
    else:
        raise InvalidTradeQuantityError(shares)

    if quantity <= 0:
        raise InvalidTradeQuantityError(shares)
    return quantity


def validate_initial_capital(value: Any, param_name: str = "initial_capital") -> Decimal:
    """Validate starting capital against the session bounds.

    Args:
        value: Proposed starting capital
        param_name: Parameter name for error messages

    Returns:
        The validated capital as Decimal

    Raises:
        ValidationError: If capital is outside [MIN_INITIAL_CAPITAL, MAX_INITIAL_CAPITAL]
    """
    capital = validate_positive(value, param_name)
    if capital < MIN_INITIAL_CAPITAL or capital > MAX_INITIAL_CAPITAL:
        raise ValidationError(
            f"{param_name} must be between {MIN_INITIAL_CAPITAL} and "
            f"{MAX_INITIAL_CAPITAL}, got {value}"
        )
    return capital


def validate_period(period: Any, param_name: str = "period") -> int:
    """Validate an indicator lookback period.

    Raises:
        ValidationError: If period is not a positive integer
    """
    if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
        raise ValidationError(f"{param_name} must be a positive integer, got {period!r}")
    return period
