"""
Custom exception hierarchy for the trading simulator.

This module defines domain-specific exceptions for better error handling.
"""


class LedgerException(Exception):
    """Base exception for all simulator errors."""

    pass


class ValidationError(LedgerException):
    """Raised when input validation fails."""

    pass


class DataError(LedgerException):
    """Raised when data access or processing fails."""

    pass


class PortfolioError(LedgerException):
    """Raised when portfolio operations fail."""

    pass


class UninitializedSessionError(PortfolioError):
    """Raised when the ledger is mutated before a session was started."""

    def __init__(self, operation: str = "operation"):
        self.operation = operation
        super().__init__(f"Cannot perform {operation}: portfolio session is not initialized")


class InsufficientFundsError(PortfolioError):
    """Raised when there are insufficient funds for an operation."""

    def __init__(self, required: float, available: float, operation: str = "operation"):
        self.required = required
        self.available = available
        self.operation = operation
        super().__init__(
            f"Insufficient funds for {operation}: "
            f"required={required:.2f}, available={available:.2f}"
        )


class InsufficientSharesError(PortfolioError):
    """Raised when selling more shares than are held."""

    def __init__(self, symbol: str, requested: int, held: int):
        self.symbol = symbol
        self.requested = requested
        self.held = held
        super().__init__(
            f"Insufficient shares of {symbol}: requested={requested}, held={held}"
        )


class InvalidTradeQuantityError(ValidationError):
    """Raised when a trade quantity is not a positive whole number of shares."""

    def __init__(self, shares: object):
        self.shares = shares
        super().__init__(f"Trade quantity must be a positive integer, got {shares!r}")
