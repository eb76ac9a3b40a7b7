"""
Utility decorators for ledger operations.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

F = TypeVar("F", bound=Callable[..., Any])

_LOGGED_PARAMETERS = ("symbol", "side", "shares", "price", "initial_capital")


def _serialize_parameter_value(value: Any) -> Any:
    """Serialize parameter value for logging."""
    if hasattr(value, "value"):
        return str(value.value)  # Handle enum values
    elif hasattr(value, "quantize"):
        return str(value)  # Handle Decimal types
    else:
        return value


def _extract_ledger_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract trade parameters from function arguments."""
    context = {}
    for param_name, value in bound_args.arguments.items():
        if param_name in _LOGGED_PARAMETERS:
            context[param_name] = _serialize_parameter_value(value)
        elif param_name == "price_updates" and hasattr(value, "__len__"):
            context["updates"] = len(value)
    return context


def _setup_logging_context(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Setup logging context for ledger operations."""
    sig = inspect.signature(func)
    bound_args = sig.bind(*args, **kwargs)
    bound_args.apply_defaults()

    return {
        "correlation_id": str(uuid.uuid4())[:8],
        "operation": func.__name__,
        **_extract_ledger_context(bound_args),
    }


def log_ledger_operation(func: F) -> F:
    """Decorator to log ledger operations with correlation IDs."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _setup_logging_context(func, args, kwargs)
        op_logger = logger.bind(**context)
        op_logger.info(f"Ledger operation started: {func.__name__}")
        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
            op_logger.bind(error_type=type(e).__name__, execution_time_ms=elapsed_ms).error(
                f"Ledger operation failed: {func.__name__}: {e}"
            )
            raise

        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        op_logger.bind(execution_time_ms=elapsed_ms).success(
            f"Ledger operation completed: {func.__name__}"
        )
        return result

    return wrapper  # type: ignore
