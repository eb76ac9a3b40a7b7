"""
Core enumerations for the trading simulator.

This module provides centralized enumerations for domain concepts
like trade sides and indicator zones.
"""

from .rsi_zone import RSIZone
from .trade_side import TradeSide

__all__ = ["TradeSide", "RSIZone"]
