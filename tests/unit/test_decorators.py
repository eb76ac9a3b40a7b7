"""
Unit tests for ledger logging decorators.
"""

from collections.abc import Generator
from decimal import Decimal

import pytest
from loguru import logger

from quantsim.core.enums import TradeSide
from quantsim.core.utils.decorators import log_ledger_operation


@pytest.fixture
def captured_records() -> Generator[list[dict]]:
    """Collect loguru records emitted during a test."""
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


class TestLogLedgerOperation:
    """Tests for log_ledger_operation decorator."""

    def test_should_log_start_and_completion_with_context(
        self, captured_records: list[dict]
    ) -> None:
        """Test bound trade parameters and correlation id."""

        # Arrange
        @log_ledger_operation
        def execute_trade(symbol: str, side: TradeSide, shares: int, price: Decimal) -> str:
            return "done"

        # Act
        result = execute_trade("AAPL", TradeSide.BUY, 10, Decimal("150.5"))

        # Assert
        assert result == "done"
        messages = [record["message"] for record in captured_records]
        assert "Ledger operation started: execute_trade" in messages
        assert "Ledger operation completed: execute_trade" in messages

        extra = captured_records[0]["extra"]
        assert extra["operation"] == "execute_trade"
        assert extra["symbol"] == "AAPL"
        assert extra["side"] == "BUY"
        assert extra["shares"] == 10
        assert extra["price"] == "150.5"
        assert len(extra["correlation_id"]) == 8

        completed = captured_records[-1]
        assert completed["level"].name == "SUCCESS"
        assert "execution_time_ms" in completed["extra"]

    def test_should_log_update_count_for_revaluation(self, captured_records: list[dict]) -> None:
        """Test price maps are summarized by size."""

        @log_ledger_operation
        def revalue_positions(price_updates: dict[str, float]) -> None:
            return None

        revalue_positions({"AAPL": 1.0, "MSFT": 2.0})

        assert captured_records[0]["extra"]["updates"] == 2
        assert "price_updates" not in captured_records[0]["extra"]

    def test_should_log_and_reraise_failures(self, captured_records: list[dict]) -> None:
        """Test errors are logged and propagated."""

        @log_ledger_operation
        def initialize(initial_capital: float) -> None:
            raise ValueError("bad capital")

        with pytest.raises(ValueError, match="bad capital"):
            initialize(-1.0)

        failed = captured_records[-1]
        assert failed["level"].name == "ERROR"
        assert failed["extra"]["error_type"] == "ValueError"
        assert failed["extra"]["initial_capital"] == -1.0
        assert "Ledger operation failed: initialize" in failed["message"]

    def test_should_preserve_function_metadata(self) -> None:
        """Test functools.wraps."""

        @log_ledger_operation
        def initialize(initial_capital: float) -> None:
            """Start a session."""

        assert initialize.__name__ == "initialize"
        assert initialize.__doc__ == "Start a session."
