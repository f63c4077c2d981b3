"""
API tests for trade endpoints.

Tests cover:
- Authentication (401 before any ledger access)
- Buy and sell responses
- Error responses (400, 404, 422, 503)
"""

import pytest
from fastapi.testclient import TestClient

from papertrade.config.settings import get_settings, set_settings

from tests.conftest import ALICE, BOB, FakeQuoteProvider


class TestAuth:
    """Bearer authentication on trade endpoints."""

    def test_missing_token_is_401(self, client: TestClient):
        """
        GIVEN no Authorization header
        WHEN I POST /trades/buy
        THEN response is 401 and no account is created
        """
        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 1})

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    def test_unknown_token_is_401(self, client: TestClient):
        response = client.post(
            "/trades/buy",
            json={"symbol": "AAPL", "quantity": 1},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401


class TestBuyAPI:
    """Tests for POST /trades/buy."""

    def test_buy_success(self, client: TestClient):
        """
        GIVEN a new user and AAPL at $150
        WHEN I POST /trades/buy for 10 shares
        THEN response is 200 with cost and new balance
        """
        response = client.post("/trades/buy", json={"symbol": "aapl", "quantity": 10}, headers=ALICE)

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["shares"] == 10
        assert data["price"] == 150.0
        assert data["total_cost"] == 1500.0
        assert data["new_balance"] == 8500.0
        assert data["is_stale_price"] is False

    def test_users_are_isolated(self, client: TestClient):
        client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 10}, headers=ALICE)

        response = client.get("/portfolio", headers=BOB)

        assert response.json()["cash_balance"] == 10000.0
        assert response.json()["positions"] == []

    def test_insufficient_balance_is_400_with_amounts(self, client: TestClient):
        """
        GIVEN $10,000 cash
        WHEN I buy 100 AAPL at $150
        THEN response is 400 naming required and available funds
        """
        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 100}, headers=ALICE)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "INSUFFICIENT_BALANCE"
        assert "$15,000.00" in data["message"]
        assert "$10,000.00" in data["message"]

    def test_zero_quantity_is_400(self, client: TestClient):
        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 0}, headers=ALICE)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_fractional_quantity_is_422(self, client: TestClient):
        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 1.5}, headers=ALICE)

        assert response.status_code == 422

    @pytest.mark.parametrize("quantity", [True, False, "3", 2.0])
    def test_non_integer_quantity_types_are_422(self, client: TestClient, quantity):
        """
        GIVEN a quantity that is a boolean, a numeric string or a float
        WHEN I buy or sell
        THEN response is 422 and no shares are bought
        """
        for path in ("/trades/buy", "/trades/sell"):
            response = client.post(path, json={"symbol": "AAPL", "quantity": quantity}, headers=ALICE)
            assert response.status_code == 422

        portfolio = client.get("/portfolio", headers=ALICE).json()
        assert portfolio["positions"] == []
        assert portfolio["cash_balance"] == 10000.0

    def test_missing_symbol_is_422(self, client: TestClient):
        response = client.post("/trades/buy", json={"quantity": 1}, headers=ALICE)

        assert response.status_code == 422

    def test_unknown_symbol_is_400(self, client: TestClient):
        response = client.post("/trades/buy", json={"symbol": "ZZZZ", "quantity": 1}, headers=ALICE)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_SYMBOL"

    def test_quote_unavailable_is_503(self, client: TestClient, quote_provider: FakeQuoteProvider):
        """
        GIVEN a rate-limited provider and nothing cached
        WHEN I buy
        THEN response is 503 with a Retry-After header
        """
        quote_provider.rate_limited = True

        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 1}, headers=ALICE)

        assert response.status_code == 503
        assert response.json()["error"] == "QUOTE_UNAVAILABLE"
        assert "retry-after" in response.headers

    def test_retry_after_follows_current_settings(
        self, client: TestClient, quote_provider: FakeQuoteProvider
    ):
        """
        GIVEN the provider interval is reconfigured to 45s after startup
        WHEN a buy hits an unavailable quote
        THEN Retry-After is 45
        """
        set_settings(get_settings().model_copy(update={"provider_min_interval_seconds": 45.0}))
        quote_provider.rate_limited = True

        response = client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 1}, headers=ALICE)

        assert response.status_code == 503
        assert response.headers["retry-after"] == "45"


class TestSellAPI:
    """Tests for POST /trades/sell."""

    def test_sell_success(self, client: TestClient, quote_provider: FakeQuoteProvider, clock):
        """
        GIVEN 10 AAPL bought at $150
        WHEN I sell 10 at $170
        THEN response reports proceeds and realized profit
        """
        client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 10}, headers=ALICE)
        quote_provider.set_price("AAPL", "170.00")
        clock.advance(minutes=6)

        response = client.post("/trades/sell", json={"symbol": "AAPL", "quantity": 10}, headers=ALICE)

        assert response.status_code == 200
        data = response.json()
        assert data["proceeds"] == 1700.0
        assert data["profit_loss"] == 200.0
        assert data["new_balance"] == 10200.0

    def test_sell_without_position_is_404(self, client: TestClient):
        response = client.post("/trades/sell", json={"symbol": "TSLA", "quantity": 1}, headers=ALICE)

        assert response.status_code == 404
        assert response.json()["error"] == "NO_SUCH_POSITION"

    def test_oversell_is_400(self, client: TestClient):
        client.post("/trades/buy", json={"symbol": "AAPL", "quantity": 2}, headers=ALICE)

        response = client.post("/trades/sell", json={"symbol": "AAPL", "quantity": 3}, headers=ALICE)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "INSUFFICIENT_SHARES"
        assert "requested 3, held 2" in data["message"]
