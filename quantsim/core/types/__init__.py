"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    HUNDRED,
    ZERO,
    blend_cost_basis,
    calculate_notional_value,
    percent_of,
    to_decimal,
    to_float,
)

__all__ = [
    # Utility functions
    "to_decimal",
    "to_float",
    "percent_of",
    "calculate_notional_value",
    "blend_cost_basis",
    # Constants
    "ZERO",
    "HUNDRED",
]
