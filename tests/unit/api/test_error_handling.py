"""Unit tests for API error handling."""

import pytest

from dex.api.main import ERROR_STATUS
from dex.errors import (
    ArithmeticOverflow,
    ExchangeError,
    InsufficientValue,
    InvalidParameter,
    StateConflict,
)


def seed_pool(client, fee: bool = True) -> None:
    """Create a funded BTC/USDC pool owned by alice."""
    client.post("/accounts/alice/credit", json={"asset": "BTC", "amount": 10_000})
    client.post("/accounts/alice/credit", json={"asset": "USDC", "amount": 20_000})
    response = client.post(
        "/pools/BTC/USDC/liquidity",
        json={"account": "alice", "amountX": 10_000, "amountY": 20_000},
    )
    assert response.status_code == 200
    if fee:
        client.post("/pools/BTC/USDC/fee", json={"feeNumerator": 30, "feeDenominator": 10_000})


class TestErrorKinds:
    """Each error kind maps to one status code."""

    def test_status_table(self):
        assert ERROR_STATUS == {
            "invalid-parameter": 400,
            "state-conflict": 409,
            "insufficient-value": 422,
            "arithmetic-overflow": 400,
        }

    @pytest.mark.parametrize(
        "error",
        [InvalidParameter, StateConflict, InsufficientValue, ArithmeticOverflow],
    )
    def test_every_kind_has_a_status(self, error):
        assert issubclass(error, ExchangeError)
        assert error.kind in ERROR_STATUS


class TestErrorResponses:
    """Rejected operations return a JSON error body."""

    def test_unregistered_pool_is_409(self, client):
        response = client.get("/pools/BTC/ETH")
        assert response.status_code == 409
        assert response.json()["error"] == "state-conflict"
        assert response.json()["code"] == "PoolNotRegistered"

    def test_identical_assets_is_400(self, client):
        response = client.get("/pools/BTC/BTC")
        assert response.status_code == 400
        assert response.json()["code"] == "IdenticalAssets"

    def test_unset_fee_is_400(self, client):
        seed_pool(client, fee=False)
        client.post("/accounts/bob/credit", json={"asset": "BTC", "amount": 1000})
        response = client.post(
            "/pools/BTC/USDC/swap/exact-in",
            json={"account": "bob", "amountIn": 1000},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "InvalidFee"

    def test_slippage_is_422_and_refunds(self, client):
        """A rejected swap leaves the account balance untouched."""
        seed_pool(client)
        client.post("/accounts/bob/credit", json={"asset": "BTC", "amount": 1000})

        response = client.post(
            "/pools/BTC/USDC/swap/exact-in",
            json={"account": "bob", "amountIn": 1000, "minAmountOut": 5000},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "insufficient-value"
        assert body["code"] == "SlippageExceeded"
        assert client.get("/accounts/bob").json()["balances"] == {"BTC": 1000}

    def test_output_at_reserve_is_422(self, client):
        """Asking for the whole reserve is an economic rejection."""
        seed_pool(client)
        client.post("/accounts/bob/credit", json={"asset": "USDC", "amount": 10**6})

        response = client.post(
            "/pools/USDC/BTC/swap/exact-out",
            json={"account": "bob", "amountOut": 10_000, "maxAmountIn": 10**6},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "insufficient-value"
        assert body["code"] == "ReserveExceeded"
        assert client.get("/accounts/bob").json()["balances"] == {"USDC": 10**6}

    def test_insufficient_balance_is_422(self, client):
        seed_pool(client)
        response = client.post(
            "/pools/BTC/USDC/swap/exact-in",
            json={"account": "carol", "amountIn": 1000},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "InsufficientBalance"

    def test_failed_bootstrap_refunds_both_assets(self, client):
        client.post("/accounts/alice/credit", json={"asset": "BTC", "amount": 1000})
        client.post("/accounts/alice/credit", json={"asset": "USDC", "amount": 1000})

        response = client.post(
            "/pools/BTC/USDC/liquidity",
            json={"account": "alice", "amountX": 1000, "amountY": 1000},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "InsufficientLiquidityMinted"
        assert client.get("/accounts/alice").json()["balances"] == {"BTC": 1000, "USDC": 1000}
        assert client.get("/pools").json()["pools"] == []

    def test_quote_needs_exactly_one_amount(self, client):
        seed_pool(client)
        response = client.get("/pools/BTC/USDC/quote")
        assert response.status_code == 400
        response = client.get("/pools/BTC/USDC/quote?amount_in=1&amount_out=1")
        assert response.status_code == 400


class TestInvalidRequestBody:
    """Malformed bodies are rejected by request validation."""

    def test_negative_amount(self, client):
        response = client.post("/accounts/alice/credit", json={"asset": "BTC", "amount": -1})
        assert response.status_code == 422

    def test_amount_above_u64(self, client):
        response = client.post(
            "/accounts/alice/credit", json={"asset": "BTC", "amount": str(2**64)}
        )
        assert response.status_code == 422

    def test_amount_as_decimal_string(self, client):
        response = client.post("/accounts/alice/credit", json={"asset": "BTC", "amount": "42"})
        assert response.status_code == 200
        assert response.json()["balances"] == {"BTC": 42}

    def test_asset_name_with_separator(self, client):
        response = client.post("/accounts/alice/credit", json={"asset": "A-B", "amount": 1})
        assert response.status_code == 422

    def test_missing_field(self, client):
        response = client.post("/pools/BTC/USDC/liquidity", json={"account": "alice"})
        assert response.status_code == 422
