"""
Technical indicators.

This module provides pure indicator functions over a closing price series
(oldest first) and a snapshot of their latest values.

Every function copies its input into a fresh float ``pd.Series`` and returns
new series with a 0-based index. Too little history is not an error: the
result is simply empty, and ``indicator_snapshot`` substitutes neutral values.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd
from loguru import logger

from quantsim.core.constants import (
    BOLLINGER_FALLBACK_WIDTH,
    BOLLINGER_PERIOD,
    BOLLINGER_STD_MULTIPLIER,
    MACD_FAST_PERIOD,
    MACD_NEUTRAL,
    MACD_SIGNAL_PERIOD,
    MACD_SLOW_PERIOD,
    RSI_NEUTRAL,
    RSI_PERIOD,
    SNAPSHOT_EMA_PERIOD,
    SNAPSHOT_SMA_PERIOD,
)
from quantsim.core.enums import RSIZone
from quantsim.core.exceptions.ledger import ValidationError
from quantsim.core.utils.validation import validate_period

PriceSeries = Sequence[float] | pd.Series


def _as_series(data: PriceSeries) -> pd.Series:
    """Copy prices into a float series with a 0-based index."""
    return pd.Series(data, dtype=float, copy=True).reset_index(drop=True)


def _empty() -> pd.Series:
    return pd.Series(dtype=float)


def calculate_sma(data: PriceSeries, period: int) -> pd.Series:
    """Simple moving average of each trailing ``period`` window.

    Returns ``len(data) - period + 1`` values, or an empty series when
    ``len(data) < period``.
    """
    period = validate_period(period)
    prices = _as_series(data)
    if len(prices) < period:
        return _empty()
    sma = prices.rolling(window=period).mean()
    return sma.iloc[period - 1 :].reset_index(drop=True)


def calculate_ema(data: PriceSeries, period: int) -> pd.Series:
    """Exponential moving average seeded with the SMA of the first window.

    ``ema[0]`` is the mean of the first ``period`` prices; each later value is
    ``alpha * price + (1 - alpha) * previous`` with ``alpha = 2 / (period + 1)``.
    Returns ``len(data) - period + 1`` values.
    """
    period = validate_period(period)
    prices = _as_series(data)
    if len(prices) < period:
        return _empty()

    seed = prices.iloc[:period].mean()
    seeded = pd.concat([pd.Series([seed]), prices.iloc[period:]], ignore_index=True)
    return seeded.ewm(alpha=2 / (period + 1), adjust=False).mean()


def _wilder_average(values: pd.Series, period: int) -> pd.Series:
    """Plain mean of the first ``period`` values, then Wilder smoothing.

    ``avg = (avg * (period - 1) + value) / period`` is an EWM with alpha 1/period.
    """
    seed = values.iloc[:period].mean()
    seeded = pd.concat([pd.Series([seed]), values.iloc[period:]], ignore_index=True)
    return seeded.ewm(alpha=1 / period, adjust=False).mean()


def calculate_rsi(data: PriceSeries, period: int = RSI_PERIOD) -> pd.Series:
    """Relative Strength Index with Wilder smoothing.

    Each value is taken before the smoothing step of the delta at its
    position: the first from the seed window of ``period`` deltas, then one
    per later delta except the last, ``len(data) - period - 1`` in total.
    The final delta never reaches an emitted value. RSI is exactly 100 when
    the average loss is zero. Returns an empty series when
    ``len(data) < period + 2``.
    """
    period = validate_period(period)
    prices = _as_series(data)
    if len(prices) < period + 2:
        return _empty()

    deltas = prices.diff().iloc[1:].reset_index(drop=True)
    gains = deltas.clip(lower=0)
    losses = (-deltas).clip(lower=0)

    avg_gain = _wilder_average(gains, period)
    avg_loss = _wilder_average(losses, period)

    rsi = 100 - 100 / (1 + avg_gain / avg_loss)
    return rsi.where(avg_loss != 0, 100.0).iloc[:-1]


@dataclass(frozen=True)
class MACDResult:
    """MACD line, signal line and histogram.

    ``macd`` starts at input index ``slow - 1``; ``signal`` and ``histogram``
    start ``signal_period - 1`` points later.
    """

    macd: pd.Series
    signal: pd.Series
    histogram: pd.Series


def calculate_macd(
    data: PriceSeries,
    fast: int = MACD_FAST_PERIOD,
    slow: int = MACD_SLOW_PERIOD,
    signal: int = MACD_SIGNAL_PERIOD,
) -> MACDResult:
    """Moving Average Convergence Divergence.

    The fast EMA begins at input index ``fast - 1`` and the slow EMA at
    ``slow - 1``, so ``slow - fast`` leading fast-EMA points are trimmed before
    subtracting. All three series are empty when ``len(data) < slow``.

    Raises:
        ValidationError: If a period is not a positive integer or fast >= slow
    """
    fast = validate_period(fast, "fast")
    slow = validate_period(slow, "slow")
    signal = validate_period(signal, "signal")
    if fast >= slow:
        raise ValidationError(f"MACD fast period must be shorter than slow, got {fast} >= {slow}")

    prices = _as_series(data)
    if len(prices) < slow:
        return MACDResult(macd=_empty(), signal=_empty(), histogram=_empty())

    fast_ema = calculate_ema(prices, fast)
    slow_ema = calculate_ema(prices, slow)

    alignment_offset = slow - fast
    fast_aligned = fast_ema.iloc[alignment_offset:].reset_index(drop=True)
    macd_line = fast_aligned - slow_ema

    signal_line = calculate_ema(macd_line, signal)
    signal_offset = len(macd_line) - len(signal_line)
    histogram = macd_line.iloc[signal_offset:].reset_index(drop=True) - signal_line

    return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)


@dataclass(frozen=True)
class BollingerBandsResult:
    """Upper, middle and lower Bollinger bands, aligned index for index."""

    upper: pd.Series
    middle: pd.Series
    lower: pd.Series


def calculate_bollinger_bands(
    data: PriceSeries,
    period: int = BOLLINGER_PERIOD,
    std_multiplier: float = BOLLINGER_STD_MULTIPLIER,
) -> BollingerBandsResult:
    """SMA-centred envelope at +/- ``std_multiplier`` population standard deviations.

    Raises:
        ValidationError: If period is invalid or std_multiplier is negative
    """
    period = validate_period(period)
    if std_multiplier < 0:
        raise ValidationError(f"std_multiplier must be non-negative, got {std_multiplier}")

    prices = _as_series(data)
    if len(prices) < period:
        return BollingerBandsResult(upper=_empty(), middle=_empty(), lower=_empty())

    middle = calculate_sma(prices, period)
    std = prices.rolling(window=period).std(ddof=0).iloc[period - 1 :].reset_index(drop=True)
    width = std_multiplier * std

    return BollingerBandsResult(upper=middle + width, middle=middle, lower=middle - width)


@dataclass(frozen=True)
class MACDSnapshot:
    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class BollingerSnapshot:
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest value of every indicator; always numeric."""

    rsi: float
    macd: MACDSnapshot
    sma20: float
    ema12: float
    bollinger: BollingerSnapshot

    @property
    def rsi_zone(self) -> RSIZone:
        """Overbought/oversold label of the RSI reading."""
        return RSIZone.classify(self.rsi)

    def to_dict(self) -> dict[str, object]:
        """Convert snapshot to a nested dictionary."""
        return {
            "rsi": self.rsi,
            "rsi_zone": self.rsi_zone.value,
            "macd": {
                "macd": self.macd.macd,
                "signal": self.macd.signal,
                "histogram": self.macd.histogram,
            },
            "sma20": self.sma20,
            "ema12": self.ema12,
            "bollinger": {
                "upper": self.bollinger.upper,
                "middle": self.bollinger.middle,
                "lower": self.bollinger.lower,
            },
        }


def _latest(series: pd.Series, default: float) -> float:
    return float(series.iloc[-1]) if len(series) > 0 else float(default)


def indicator_snapshot(data: PriceSeries, current_price: float | None = None) -> IndicatorSnapshot:
    """Latest RSI, MACD, SMA(20), EMA(12) and Bollinger values.

    Any indicator without enough history falls back to a neutral value:
    RSI 50, MACD components 0, SMA/EMA the current price, Bollinger the
    current price +/- 2%.

    Args:
        data: Closing prices, oldest first
        current_price: Price used for fallbacks; defaults to the last close

    Raises:
        ValidationError: If data is empty and no current_price is given
    """
    prices = _as_series(data)
    if current_price is None:
        if prices.empty:
            raise ValidationError("current_price is required when the price series is empty")
        current_price = float(prices.iloc[-1])
    current_price = float(current_price)

    rsi = calculate_rsi(prices)
    macd = calculate_macd(prices)
    sma = calculate_sma(prices, SNAPSHOT_SMA_PERIOD)
    ema = calculate_ema(prices, SNAPSHOT_EMA_PERIOD)
    bands = calculate_bollinger_bands(prices)

    if rsi.empty or macd.signal.empty or bands.middle.empty:
        logger.debug(f"Neutral indicator defaults used for {len(prices)} prices")

    return IndicatorSnapshot(
        rsi=_latest(rsi, RSI_NEUTRAL),
        macd=MACDSnapshot(
            macd=_latest(macd.macd, MACD_NEUTRAL),
            signal=_latest(macd.signal, MACD_NEUTRAL),
            histogram=_latest(macd.histogram, MACD_NEUTRAL),
        ),
        sma20=_latest(sma, current_price),
        ema12=_latest(ema, current_price),
        bollinger=BollingerSnapshot(
            upper=_latest(bands.upper, current_price * (1 + BOLLINGER_FALLBACK_WIDTH)),
            middle=_latest(bands.middle, current_price),
            lower=_latest(bands.lower, current_price * (1 - BOLLINGER_FALLBACK_WIDTH)),
        ),
    )
