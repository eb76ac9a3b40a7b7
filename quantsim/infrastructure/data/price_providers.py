"""
Price providers.

Pluggable price feeds for the simulator. ``RandomWalkPriceProvider`` produces
the synthetic daily history used for demos; ``StaticPriceProvider`` replays
fixed series so tests and scripted sessions are deterministic.
"""

from collections.abc import Mapping, Sequence

import numpy as np
from loguru import logger

from quantsim.core.constants import DEFAULT_MOCK_PRICE, MOCK_DAILY_VOLATILITY
from quantsim.core.exceptions.ledger import DataError, ValidationError
from quantsim.core.interfaces.data import IPriceProvider
from quantsim.core.utils.validation import validate_period, validate_symbol


class RandomWalkPriceProvider(IPriceProvider):
    """Synthetic prices from a bounded random walk.

    Each step moves the price by ``(u - 0.5) * base * volatility`` with ``u``
    uniform on [0, 1), floored at zero. The walk for a symbol starts at its
    base price.
    """

    def __init__(
        self,
        base_prices: Mapping[str, float] | None = None,
        volatility: float = MOCK_DAILY_VOLATILITY,
        seed: int | None = None,
        default_price: float = DEFAULT_MOCK_PRICE,
    ) -> None:
        """Initialize the provider.

        Args:
            base_prices: Starting price per symbol
            volatility: Step range as a fraction of the base price
            seed: Seed for the numpy generator; None for a random walk per run
            default_price: Starting price for symbols without a base price
        """
        if volatility < 0:
            raise ValidationError(f"volatility must be non-negative, got {volatility}")
        if default_price <= 0:
            raise ValidationError(f"default_price must be positive, got {default_price}")

        self._base_prices = {
            validate_symbol(symbol): float(price) for symbol, price in (base_prices or {}).items()
        }
        self._volatility = volatility
        self._default_price = default_price
        self._rng = np.random.default_rng(seed)
        self._last_prices: dict[str, float] = {}

    def base_price(self, symbol: str) -> float:
        """Starting price of a symbol's walk."""
        return self._base_prices.get(validate_symbol(symbol), self._default_price)

    def _step(self, price: float, base: float) -> float:
        change = (self._rng.random() - 0.5) * base * self._volatility
        return max(0.0, price + change)

    def next_price(self, symbol: str) -> float:
        """Advance the symbol's walk by one step."""
        symbol = validate_symbol(symbol)
        base = self.base_price(symbol)
        price = self._step(self._last_prices.get(symbol, base), base)
        self._last_prices[symbol] = price
        return price

    def history(self, symbol: str, days: int) -> list[float]:
        """Generate ``days`` prices starting from the base price.

        The last generated price becomes the symbol's current price.
        """
        symbol = validate_symbol(symbol)
        days = validate_period(days, "days")
        base = self.base_price(symbol)

        prices = [base]
        for _ in range(1, days):
            prices.append(self._step(prices[-1], base))

        self._last_prices[symbol] = prices[-1]
        logger.debug(f"Generated {days} synthetic prices for {symbol}")
        return prices


class StaticPriceProvider(IPriceProvider):
    """Replays fixed price series, one per symbol.

    ``next_price`` walks forward through the series and keeps returning the
    final value once it is exhausted.
    """

    def __init__(self, series: Mapping[str, Sequence[float]]) -> None:
        self._series: dict[str, list[float]] = {}
        for symbol, prices in series.items():
            values = [float(price) for price in prices]
            if not values:
                raise ValidationError(f"Price series for {symbol} is empty")
            self._series[validate_symbol(symbol)] = values
        self._cursors: dict[str, int] = {}

    def _prices(self, symbol: str) -> list[float]:
        symbol = validate_symbol(symbol)
        if symbol not in self._series:
            raise DataError(f"No price series configured for {symbol}")
        return self._series[symbol]

    def next_price(self, symbol: str) -> float:
        """Return the next price of the series."""
        prices = self._prices(symbol)
        key = validate_symbol(symbol)
        cursor = self._cursors.get(key, 0)
        self._cursors[key] = min(cursor + 1, len(prices) - 1)
        return prices[cursor]

    def history(self, symbol: str, days: int) -> list[float]:
        """Return the last ``days`` prices of the series (all of it if shorter)."""
        days = validate_period(days, "days")
        return list(self._prices(symbol)[-days:])
