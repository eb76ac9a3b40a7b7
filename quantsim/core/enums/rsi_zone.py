"""
RSI zone enumeration.

This module maps an RSI reading onto the overbought/oversold labels shown to traders.
"""

from enum import StrEnum

from quantsim.core.constants import RSI_OVERBOUGHT, RSI_OVERSOLD


class RSIZone(StrEnum):
    """
    Momentum zones of the Relative Strength Index.

    Readings above 70 are overbought, below 30 oversold, anything else neutral.
    """

    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NEUTRAL = "neutral"

    @classmethod
    def classify(cls, rsi: float) -> "RSIZone":
        """
        Classify an RSI reading.

        Args:
            rsi: RSI value in [0, 100]

        Returns:
            Zone the reading falls into
        """
        if rsi > RSI_OVERBOUGHT:
            return cls.OVERBOUGHT
        if rsi < RSI_OVERSOLD:
            return cls.OVERSOLD
        return cls.NEUTRAL
