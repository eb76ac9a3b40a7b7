"""Price data infrastructure for the trading simulator."""

from .price_providers import RandomWalkPriceProvider, StaticPriceProvider
from .technical_indicators import indicator_snapshot

__all__ = [
    "RandomWalkPriceProvider",
    "StaticPriceProvider",
    "indicator_snapshot",
]
