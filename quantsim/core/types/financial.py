"""
Financial data types for ledger calculations.

The ledger keeps every cash and price amount as ``Decimal`` so that a buy
followed by a sell at the same price restores cash exactly. Float inputs are
converted through their shortest string representation, which keeps
``to_decimal(33.33)`` equal to ``Decimal("33.33")`` instead of the binary
expansion of the float.

Indicator math stays in float (pandas/numpy) and never touches these helpers.
"""

from decimal import Decimal

# Common financial values as Decimal constants
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: str | int | float | Decimal) -> Decimal:
    """Convert various numeric types to Decimal.

    Args:
        value: Numeric value to convert

    Returns:
        Decimal representation of the value

    Examples:
        >>> to_decimal(50000)
        Decimal('50000')
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a numeric amount")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def to_float(value: Decimal | float | int) -> float:
    """Convert a Decimal amount to float for reporting and numpy math."""
    if isinstance(value, float):
        return value
    return float(value)


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """Express ``part`` as a percentage of ``whole``; zero when ``whole`` is zero."""
    if whole == ZERO:
        return ZERO
    return part / whole * HUNDRED


def calculate_notional_value(shares: int, price: Decimal) -> Decimal:
    """Calculate the cash value of ``shares`` at ``price``."""
    return Decimal(shares) * to_decimal(price)


def blend_cost_basis(
    held_shares: int, held_avg_price: Decimal, added_shares: int, added_total: Decimal
) -> Decimal:
    """Weighted average cost per share after adding shares to a holding.

    Args:
        held_shares: Shares currently held
        held_avg_price: Current average cost per share
        added_shares: Shares being bought
        added_total: Cash paid for the added shares

    Returns:
        New average cost per share
    """
    total_shares = held_shares + added_shares
    return (Decimal(held_shares) * held_avg_price + added_total) / Decimal(total_shares)
