"""
Unit tests for validation utilities.
"""

from decimal import Decimal

import pytest

from quantsim.core.enums import TradeSide
from quantsim.core.exceptions.ledger import InvalidTradeQuantityError, ValidationError
from quantsim.core.utils.validation import (
    validate_initial_capital,
    validate_period,
    validate_positive,
    validate_share_quantity,
    validate_side,
    validate_symbol,
)


class TestValidateSymbol:
    """Tests for validate_symbol."""

    def test_should_normalize_symbol(self) -> None:
        """Test whitespace is stripped and case is raised."""
        assert validate_symbol(" aapl ") == "AAPL"

    @pytest.mark.parametrize("value", ["", "   ", None, 123])
    def test_should_reject_invalid_symbol(self, value: object) -> None:
        """Test empty and non-string symbols."""
        with pytest.raises(ValidationError):
            validate_symbol(value)


class TestValidateSide:
    """Tests for validate_side."""

    def test_should_accept_enum_and_string(self) -> None:
        """Test both forms are accepted."""
        assert validate_side(TradeSide.SELL) is TradeSide.SELL
        assert validate_side("buy") is TradeSide.BUY

    @pytest.mark.parametrize("value", ["HOLD", 1, None])
    def test_should_reject_unknown_side(self, value: object) -> None:
        """Test invalid sides raise ValidationError."""
        with pytest.raises(ValidationError):
            validate_side(value)


class TestValidatePositive:
    """Tests for validate_positive."""

    def test_should_return_decimal(self) -> None:
        """Test conversion to Decimal."""
        assert validate_positive(150.25, "price") == Decimal("150.25")
        assert validate_positive("10", "price") == Decimal("10")

    @pytest.mark.parametrize("value", [0, -1, -0.01, float("nan"), float("inf"), "abc", True])
    def test_should_reject_non_positive_or_non_numeric(self, value: object) -> None:
        """Test zero, negative, non-finite and non-numeric values."""
        with pytest.raises(ValidationError, match="price"):
            validate_positive(value, "price")


class TestValidateShareQuantity:
    """Tests for validate_share_quantity."""

    @pytest.mark.parametrize(
        "value,expected", [(1, 1), (250, 250), (5.0, 5), (Decimal("3"), 3)]
    )
    def test_should_accept_whole_positive_numbers(self, value: object, expected: int) -> None:
        """Test integral values are accepted."""
        result = validate_share_quantity(value)
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize(
        "value",
        [0, -5, 2.5, Decimal("0.1"), True, False, "10", None, float("nan"), float("inf")],
    )
    def test_should_reject_invalid_quantities(self, value: object) -> None:
        """Test fractional, non-positive and non-numeric quantities."""
        with pytest.raises(InvalidTradeQuantityError):
            validate_share_quantity(value)


class TestValidateInitialCapital:
    """Tests for validate_initial_capital."""

    @pytest.mark.parametrize("value", [10000, 100000, 1000000])
    def test_should_accept_capital_within_bounds(self, value: int) -> None:
        """Test inclusive bounds."""
        assert validate_initial_capital(value) == Decimal(value)

    @pytest.mark.parametrize("value", [9999.99, 1000000.01, 0, -100])
    def test_should_reject_capital_outside_bounds(self, value: float) -> None:
        """Test values outside the session bounds."""
        with pytest.raises(ValidationError):
            validate_initial_capital(value)


class TestValidatePeriod:
    """Tests for validate_period."""

    def test_should_accept_positive_int(self) -> None:
        """Test valid period."""
        assert validate_period(14) == 14

    @pytest.mark.parametrize("value", [0, -1, 2.0, True, "14"])
    def test_should_reject_invalid_period(self, value: object) -> None:
        """Test invalid periods."""
        with pytest.raises(ValidationError, match="period"):
            validate_period(value)
