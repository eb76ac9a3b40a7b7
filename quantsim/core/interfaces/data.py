"""
Price data interfaces.
"""

from abc import ABC, abstractmethod


class IPriceProvider(ABC):
    """Abstract interface for a price feed consumed by the simulator.

    The core never fetches prices itself: callers pull from a provider and hand
    the values to the ledger (revaluation) or the indicator engine (history).
    """

    @abstractmethod
    def next_price(self, symbol: str) -> float:
        """Return the next current price for a symbol."""
        pass

    @abstractmethod
    def history(self, symbol: str, days: int) -> list[float]:
        """Return ``days`` closing prices for a symbol, oldest first."""
        pass
