"""
Core constants and limits.

Defines session bounds, indicator defaults and fallback values shared by
the ledger, the indicator engine and the outer surfaces.
"""

# Session Limits
MIN_INITIAL_CAPITAL = 10000  # Smallest accepted starting capital
MAX_INITIAL_CAPITAL = 1000000  # Largest accepted starting capital
DEFAULT_INITIAL_CAPITAL = 100000

# Indicator Periods
RSI_PERIOD = 14
MACD_FAST_PERIOD = 12
MACD_SLOW_PERIOD = 26
MACD_SIGNAL_PERIOD = 9
BOLLINGER_PERIOD = 20
BOLLINGER_STD_MULTIPLIER = 2.0
SNAPSHOT_SMA_PERIOD = 20
SNAPSHOT_EMA_PERIOD = 12

# Snapshot fallbacks when history is too short
RSI_NEUTRAL = 50.0
MACD_NEUTRAL = 0.0
BOLLINGER_FALLBACK_WIDTH = 0.02  # current price +/- 2%

# RSI zones
RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

# Portfolio metric placeholders (need a portfolio value history)
PLACEHOLDER_MAX_DRAWDOWN = 0.0
PLACEHOLDER_BETA = 1.0

# Price providers
DEFAULT_HISTORY_DAYS = 100
MOCK_DAILY_VOLATILITY = 0.02
DEFAULT_MOCK_PRICE = 100.0

# Persistence
SNAPSHOT_FORMAT_VERSION = 1
