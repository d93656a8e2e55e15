from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.common.models import ApiError, ErrorKind
from app.api.whatif.models import (
    AnalysisRequest,
    AnalysisResponse,
    CoinComparison,
    EthPortfolio,
)
from app.api.whatif.routes import get_analyzer
from app.api.whatif.service import WhatIfAnalyzer
from app.main import app

ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def mock_analyzer():
    analyzer = AsyncMock()
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    yield analyzer
    app.dependency_overrides.pop(get_analyzer, None)


@pytest.fixture
def coingecko_client():
    coingecko_client = MagicMock()
    coingecko_client.get_coin_markets = AsyncMock()
    app.dependency_overrides[get_analyzer] = lambda: WhatIfAnalyzer(
        coingecko_client=coingecko_client
    )
    yield coingecko_client
    app.dependency_overrides.pop(get_analyzer, None)


@pytest.fixture
def analysis():
    return AnalysisResponse(
        eth=EthPortfolio(
            balance=2.0,
            current_price=3000.0,
            month_ago_price=2400.0,
            value_month_ago=4800.0,
            current_value=6000.0,
            price_change=25.0,
        ),
        comparisons=[
            CoinComparison(
                coin="Dogecoin",
                symbol="DOGE",
                potential_gain=4080.0,
                actual_gain=110.0,
                price_change=110.0,
                eth_change=25.0,
                token_change=110.0,
                eth_winner=False,
            ),
            CoinComparison(
                coin="Monero",
                symbol="XMR",
                potential_gain=-1776.0,
                actual_gain=-12.0,
                price_change=-12.0,
                eth_change=25.0,
                token_change=-12.0,
                eth_winner=True,
            ),
        ],
    )


def test_index_renders_form(client, mock_analyzer):
    response = client.get("/")

    assert response.status_code == 200
    assert "Ethereum What-If Machine" in response.text
    assert "Use Wallet Address" in response.text
    assert 'name="address"' in response.text
    assert "Show Me What Could Have Been" in response.text
    assert "Calculating your alternate timeline wealth..." in response.text
    mock_analyzer.analyze.assert_not_called()


def test_index_manual_mode_form(client, mock_analyzer):
    response = client.get("/", params={"mode": "manual"})

    assert response.status_code == 200
    assert 'name="eth_amount"' in response.text
    assert "Example: 10.5 (for 10.5 ETH)" in response.text
    mock_analyzer.analyze.assert_not_called()


def test_index_address_results(client, mock_analyzer, analysis):
    mock_analyzer.analyze.return_value = analysis

    response = client.get("/", params={"mode": "address", "address": ADDRESS})

    assert response.status_code == 200
    html = response.text
    assert "Valid address! Time to see what could have been..." in html
    assert "2.0000 ETH" in html
    assert "$4,800.00" in html
    assert "$6,000.00" in html
    assert "You could have made an extra $4,080.00!" in html
    assert "You made the right choice!" in html
    assert "110%" in html
    assert "110.0%" not in html
    assert html.index("Dogecoin") < html.index("Monero")
    mock_analyzer.analyze.assert_awaited_once_with(AnalysisRequest(address=ADDRESS))


def test_index_manual_results(client, mock_analyzer, analysis):
    mock_analyzer.analyze.return_value = analysis

    response = client.get("/", params={"mode": "manual", "eth_amount": "2"})

    assert response.status_code == 200
    assert "What You Could Have Had" in response.text
    mock_analyzer.analyze.assert_awaited_once_with(AnalysisRequest(eth_amount=2.0))


@pytest.mark.parametrize(
    "eth_amount", ["", "abc", "0", "-1", "nan", "inf", "-inf", "1e400"]
)
def test_index_invalid_amount(client, coingecko_client, eth_amount):
    response = client.get("/", params={"mode": "manual", "eth_amount": eth_amount})

    assert response.status_code == 200
    assert "Please enter a valid ETH amount" in response.text
    assert "What You Could Have Had" not in response.text
    assert "inf ETH" not in response.text
    coingecko_client.get_coin_markets.assert_not_called()


def test_index_invalid_address(client, mock_analyzer):
    mock_analyzer.analyze.side_effect = ApiError.from_kind(ErrorKind.INVALID_ADDRESS)

    response = client.get("/", params={"address": "0x1234"})

    assert "Invalid Ethereum address - Did you copy that right?" in response.text
    assert "Valid address!" not in response.text


def test_index_upstream_error_shows_default_message(client, mock_analyzer):
    mock_analyzer.analyze.side_effect = ApiError(
        message="Failed to fetch market data",
        kind=ErrorKind.UPSTREAM_ERROR,
        status_code=502,
    )

    response = client.get("/", params={"address": ADDRESS})

    assert (
        "Failed to analyze wallet. Please try again in a few minutes." in response.text
    )
