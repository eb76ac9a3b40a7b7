"""
Integration tests for the HTTP API.
Testing the FastAPI app end to end against an in-memory ledger.
"""

import pytest
from fastapi.testclient import TestClient

from quantsim.api.main import create_app
from quantsim.core.models.portfolio import PortfolioLedger
from quantsim.infrastructure.data.price_providers import StaticPriceProvider


@pytest.fixture
def ledger() -> PortfolioLedger:
    return PortfolioLedger()


@pytest.fixture
def client(ledger: PortfolioLedger) -> TestClient:
    provider = StaticPriceProvider(
        {
            "AAPL": [100.0 + i for i in range(40)],
            "MSFT": [300.0, 301.0, 299.0],
        }
    )
    return TestClient(create_app(ledger=ledger, price_provider=provider))


@pytest.fixture
def initialized(client: TestClient) -> TestClient:
    response = client.post("/api/portfolio/initialize", json={"initial_capital": 100000})
    assert response.status_code == 200
    return client


class TestHealthEndpoints:
    """Tests for service endpoints."""

    def test_should_report_health(self, client: TestClient) -> None:
        """Test health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_should_describe_api(self, client: TestClient) -> None:
        """Test root endpoint."""
        assert client.get("/").json()["status"] == "running"


class TestPortfolioEndpoints:
    """Tests for the portfolio router."""

    def test_should_show_uninitialized_portfolio(self, client: TestClient) -> None:
        """Test empty ledger view."""
        body = client.get("/api/portfolio").json()

        assert body["session"] is None
        assert body["positions"] == []
        assert body["portfolio"]["total_value"] == 0.0

    def test_should_initialize_session(self, client: TestClient) -> None:
        """Test initialize response."""
        response = client.post("/api/portfolio/initialize", json={"initial_capital": 50000})

        assert response.status_code == 200
        body = response.json()
        assert body["session"]["initial_capital"] == 50000.0
        assert body["portfolio"]["cash"] == 50000.0
        assert body["portfolio"]["total_value"] == 50000.0

    @pytest.mark.parametrize("capital", [5000, 2000000, -1])
    def test_should_reject_capital_outside_bounds(self, client: TestClient, capital: int) -> None:
        """Test request validation of the session bounds."""
        response = client.post("/api/portfolio/initialize", json={"initial_capital": capital})

        assert response.status_code == 422

    def test_should_reject_trade_before_initialize(self, client: TestClient) -> None:
        """Test uninitialized ledger maps to 409."""
        response = client.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "BUY", "shares": 1, "price": 100},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "UninitializedSessionError"

    def test_should_execute_buy_and_sell(self, initialized: TestClient) -> None:
        """Test trade execution and resulting portfolio."""
        # Act
        buy = initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "aapl", "side": "BUY", "shares": 10, "price": 150},
        )
        sell = initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "SELL", "shares": 4, "price": 160},
        )

        # Assert
        assert buy.status_code == 201
        assert buy.json()["id"] == "1"
        assert buy.json()["symbol"] == "AAPL"
        assert buy.json()["total"] == 1500.0
        assert sell.status_code == 201
        assert sell.json()["side"] == "SELL"

        portfolio = initialized.get("/api/portfolio").json()
        assert portfolio["portfolio"]["cash"] == 99140.0
        assert portfolio["positions"][0]["shares"] == 6
        assert portfolio["positions"][0]["avg_price"] == 150.0

    def test_should_map_insufficient_shares_to_400(self, initialized: TestClient) -> None:
        """Test business rule violations."""
        response = initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "SELL", "shares": 1, "price": 100},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "InsufficientSharesError"
        assert "AAPL" in body["message"]

    def test_should_map_insufficient_funds_to_400(self, initialized: TestClient) -> None:
        """Test buying beyond cash."""
        response = initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "BUY", "shares": 10000, "price": 100},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "InsufficientFundsError"

    @pytest.mark.parametrize(
        "payload",
        [
            {"symbol": "AAPL", "side": "BUY", "shares": 0, "price": 100},
            {"symbol": "AAPL", "side": "BUY", "shares": 2.5, "price": 100},
            {"symbol": "AAPL", "side": "BUY", "shares": 1, "price": 0},
            {"symbol": "AAPL", "side": "HOLD", "shares": 1, "price": 100},
            {"symbol": "  ", "side": "BUY", "shares": 1, "price": 100},
        ],
    )
    def test_should_reject_invalid_trade_requests(
        self, initialized: TestClient, payload: dict
    ) -> None:
        """Test schema validation."""
        response = initialized.post("/api/portfolio/trades", json=payload)

        assert response.status_code == 422
        assert initialized.get("/api/portfolio/transactions").json() == []

    def test_should_revalue_positions(self, initialized: TestClient) -> None:
        """Test mark-to-market endpoint."""
        initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "BUY", "shares": 10, "price": 100},
        )

        body = initialized.post("/api/portfolio/revalue", json={"prices": {"AAPL": 110}}).json()

        assert body["positions"][0]["market_value"] == 1100.0
        assert body["positions"][0]["total_return"] == 100.0
        assert body["portfolio"]["total_return"] == 100.0

    def test_should_reject_non_positive_revaluation(self, initialized: TestClient) -> None:
        """Test revaluation validation."""
        response = initialized.post("/api/portfolio/revalue", json={"prices": {"AAPL": 0}})

        assert response.status_code == 422

    def test_should_return_position_or_404(self, initialized: TestClient) -> None:
        """Test single position lookup."""
        initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "MSFT", "side": "BUY", "shares": 2, "price": 300},
        )

        assert initialized.get("/api/portfolio/positions/msft").json()["shares"] == 2
        assert initialized.get("/api/portfolio/positions/TSLA").status_code == 404

    def test_should_list_transactions_newest_first(self, initialized: TestClient) -> None:
        """Test transaction log order."""
        for symbol in ("AAPL", "MSFT"):
            initialized.post(
                "/api/portfolio/trades",
                json={"symbol": symbol, "side": "BUY", "shares": 1, "price": 100},
            )

        body = initialized.get("/api/portfolio/transactions").json()

        assert [t["symbol"] for t in body] == ["MSFT", "AAPL"]

    def test_should_report_metrics(self, initialized: TestClient) -> None:
        """Test metrics endpoint."""
        initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "BUY", "shares": 10, "price": 100},
        )
        initialized.post(
            "/api/portfolio/trades",
            json={"symbol": "AAPL", "side": "SELL", "shares": 5, "price": 120},
        )

        body = initialized.get("/api/portfolio/metrics").json()

        assert body["volatility"] == pytest.approx(800.0)
        assert body["sharpe_ratio"] == pytest.approx(-0.25)
        assert body["beta"] == 1.0
        assert body["max_drawdown"] == 0.0

    def test_should_manage_watchlist(self, client: TestClient) -> None:
        """Test add, duplicate add and remove."""
        client.post("/api/portfolio/watchlist", json={"symbol": "nvda"})
        client.post("/api/portfolio/watchlist", json={"symbol": "NVDA"})
        client.post("/api/portfolio/watchlist", json={"symbol": "AMD"})

        assert client.get("/api/portfolio/watchlist").json() == {"symbols": ["NVDA", "AMD"]}
        assert client.delete("/api/portfolio/watchlist/nvda").json() == {"symbols": ["AMD"]}
        assert client.delete("/api/portfolio/watchlist/NVDA").status_code == 404


class TestIndicatorEndpoints:
    """Tests for the indicators router."""

    def test_should_snapshot_posted_prices(self, client: TestClient) -> None:
        """Test neutral fallbacks for short input."""
        response = client.post(
            "/api/indicators/snapshot", json={"prices": [10.0, 11.0], "current_price": 11.0}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["rsi"] == 50.0
        assert body["rsi_zone"] == "neutral"
        assert body["macd"] == {"macd": 0.0, "signal": 0.0, "histogram": 0.0}
        assert body["sma20"] == 11.0

    def test_should_reject_empty_prices_without_current_price(self, client: TestClient) -> None:
        """Test domain validation maps to 422."""
        response = client.post("/api/indicators/snapshot", json={"prices": []})

        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_should_snapshot_provider_history(self, client: TestClient) -> None:
        """Test indicators over the configured series."""
        body = client.get("/api/indicators/aapl", params={"days": 40}).json()

        assert body["symbol"] == "AAPL"
        assert body["rsi"] == 100.0
        assert body["rsi_zone"] == "overbought"
        assert body["sma20"] == pytest.approx(129.5)

    def test_should_return_404_for_symbol_without_prices(self, client: TestClient) -> None:
        """Test a symbol the provider has no series for."""
        response = client.get("/api/indicators/zzzz")

        assert response.status_code == 404
        assert "ZZZZ" in response.json()["detail"]

    def test_should_validate_days(self, client: TestClient) -> None:
        """Test query bounds."""
        assert client.get("/api/indicators/AAPL", params={"days": 0}).status_code == 422
