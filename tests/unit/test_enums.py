"""
Unit tests for core enumerations.
"""

import pytest

from quantsim.core.enums import RSIZone, TradeSide


class TestTradeSide:
    """Tests for TradeSide enum."""

    def test_should_have_buy_and_sell(self) -> None:
        """Test enum values."""
        assert TradeSide.BUY.value == "BUY"
        assert TradeSide.SELL.value == "SELL"
        assert len(TradeSide) == 2

    def test_should_report_cash_flow_sign(self) -> None:
        """Test buys spend cash and sells receive it."""
        assert TradeSide.BUY.cash_flow_sign == -1
        assert TradeSide.SELL.cash_flow_sign == 1
        assert TradeSide.BUY.is_buy
        assert not TradeSide.SELL.is_buy

    @pytest.mark.parametrize(
        "value,expected",
        [("BUY", TradeSide.BUY), ("buy", TradeSide.BUY), (" Sell ", TradeSide.SELL)],
    )
    def test_should_parse_from_string(self, value: str, expected: TradeSide) -> None:
        """Test case-insensitive parsing."""
        assert TradeSide.from_string(value) == expected

    def test_should_reject_unknown_side(self) -> None:
        """Test unsupported side raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported trade side"):
            TradeSide.from_string("SHORT")


class TestRSIZone:
    """Tests for RSIZone enum."""

    @pytest.mark.parametrize(
        "rsi,expected",
        [
            (85.0, RSIZone.OVERBOUGHT),
            (70.1, RSIZone.OVERBOUGHT),
            (70.0, RSIZone.NEUTRAL),
            (50.0, RSIZone.NEUTRAL),
            (30.0, RSIZone.NEUTRAL),
            (29.9, RSIZone.OVERSOLD),
            (0.0, RSIZone.OVERSOLD),
        ],
    )
    def test_should_classify_rsi(self, rsi: float, expected: RSIZone) -> None:
        """Test zone thresholds at 70 and 30."""
        assert RSIZone.classify(rsi) == expected
