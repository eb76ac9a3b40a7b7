"""
Trade side enumeration.

This module defines the allowed sides of an executed trade.
"""

from enum import StrEnum


class TradeSide(StrEnum):
    """
    Allowed trade sides.

    Only immediate market execution exists, so a trade is either a buy or a sell.
    """

    BUY = "BUY"
    SELL = "SELL"

    @property
    def is_buy(self) -> bool:
        """Check if side adds shares."""
        return self == self.BUY

    @property
    def cash_flow_sign(self) -> int:
        """Sign of the cash movement caused by this side (buys spend cash)."""
        return -1 if self.is_buy else 1

    @classmethod
    def from_string(cls, value: str) -> "TradeSide":
        """
        Convert string to TradeSide enum, with case-insensitive matching.

        Args:
            value: String representation of side

        Returns:
            Corresponding TradeSide enum value

        Raises:
            ValueError: If side is not supported
        """
        value_upper = value.strip().upper()
        for side in cls:
            if side.value == value_upper:
                return side

        raise ValueError(
            f"Unsupported trade side: {value}. "
            f"Supported sides: {', '.join([s.value for s in cls])}"
        )
