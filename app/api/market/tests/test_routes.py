from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.common.models import ApiError, ErrorKind
from app.api.market.models import EthPrice, NativeCoinChange
from app.api.market.routes import get_coingecko_client
from app.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def mock_coingecko_client():
    coingecko_client = AsyncMock()
    app.dependency_overrides[get_coingecko_client] = lambda: coingecko_client
    yield coingecko_client
    app.dependency_overrides.pop(get_coingecko_client, None)


@pytest.mark.parametrize("path", ["/api/top-coins", "/top-coins"])
def test_get_top_coins(client, mock_coingecko_client, path):
    mock_coingecko_client.get_top_native_coins.return_value = [
        NativeCoinChange(name="Dogecoin", symbol="DOGE", price_change_30d=110.0),
        NativeCoinChange(name="Cardano", symbol="ADA", price_change_30d=None),
    ]

    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == {
        "symbolChangeArray": [
            {"name": "Dogecoin", "symbol": "DOGE", "price_change_30d": 110.0},
            {"name": "Cardano", "symbol": "ADA", "price_change_30d": None},
        ]
    }
    mock_coingecko_client.get_top_native_coins.assert_awaited_once_with(None)


def test_get_top_coins_limit(client, mock_coingecko_client):
    mock_coingecko_client.get_top_native_coins.return_value = []

    response = client.get("/api/top-coins", params={"limit": 3})

    assert response.status_code == 200
    mock_coingecko_client.get_top_native_coins.assert_awaited_once_with(3)


def test_get_top_coins_invalid_limit(client, mock_coingecko_client):
    response = client.get("/api/top-coins", params={"limit": 0})

    assert response.status_code == 422


def test_get_top_coins_upstream_failure(client, mock_coingecko_client):
    mock_coingecko_client.get_top_native_coins.side_effect = httpx.ReadTimeout(
        "timed out"
    )

    response = client.get("/api/top-coins")

    assert response.status_code == 502
    assert response.json() == {
        "error": "Failed to fetch top coins",
        "details": "timed out",
        "kind": "UPSTREAM_ERROR",
    }


@pytest.mark.parametrize("path", ["/api/eth-price", "/eth-price"])
def test_get_eth_price(client, mock_coingecko_client, path):
    mock_coingecko_client.get_eth_price.return_value = EthPrice(
        current=3000.0, month_ago=2400.0, change=20.0
    )

    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == {"cur": 3000.0, "back": 2400.0, "change": 20.0}


def test_get_eth_price_upstream_failure(client, mock_coingecko_client):
    mock_coingecko_client.get_eth_price.side_effect = httpx.ConnectError("refused")

    response = client.get("/api/eth-price")

    assert response.status_code == 502
    assert response.json()["error"] == "Failed to fetch ETH price"


def test_get_eth_price_missing_ethereum(client, mock_coingecko_client):
    mock_coingecko_client.get_eth_price.side_effect = ApiError(
        message="Failed to fetch ETH price",
        kind=ErrorKind.UPSTREAM_ERROR,
        status_code=502,
        details="Ethereum is missing from the CoinGecko markets response",
    )

    response = client.get("/api/eth-price")

    assert response.status_code == 502
    assert response.json()["kind"] == "UPSTREAM_ERROR"
