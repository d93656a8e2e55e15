from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.common.models import ApiError, ErrorKind
from app.api.whatif.models import AnalysisRequest, AnalysisResponse, EthPortfolio
from app.api.whatif.routes import get_analyzer
from app.api.whatif.service import WhatIfAnalyzer
from app.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def mock_analyzer():
    analyzer = AsyncMock()
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    yield analyzer
    app.dependency_overrides.pop(get_analyzer, None)


def test_analysis(client, mock_analyzer):
    mock_analyzer.analyze.return_value = AnalysisResponse(
        eth=EthPortfolio(
            balance=1.0,
            current_price=3000.0,
            month_ago_price=2400.0,
            value_month_ago=2400.0,
            current_value=3000.0,
            price_change=25.0,
        ),
        comparisons=[],
    )

    response = client.post("/api/v1/analysis", json={"eth_amount": 1.0})

    assert response.status_code == 200
    assert response.json()["eth"]["current_value"] == 3000.0
    assert response.json()["comparisons"] == []
    mock_analyzer.analyze.assert_awaited_once_with(AnalysisRequest(eth_amount=1.0))


def test_analysis_error(client, mock_analyzer):
    mock_analyzer.analyze.side_effect = ApiError.from_kind(ErrorKind.INVALID_AMOUNT)

    response = client.post("/api/v1/analysis", json={"eth_amount": 0})

    assert response.status_code == 400
    assert response.json()["kind"] == "INVALID_AMOUNT"


def test_analysis_rejects_malformed_body(client, mock_analyzer):
    response = client.post("/api/v1/analysis", json={"eth_amount": "lots"})

    assert response.status_code == 422
    mock_analyzer.analyze.assert_not_called()


@pytest.fixture
def coingecko_client():
    coingecko_client = MagicMock()
    coingecko_client.get_coin_markets = AsyncMock()
    app.dependency_overrides[get_analyzer] = lambda: WhatIfAnalyzer(
        coingecko_client=coingecko_client
    )
    yield coingecko_client
    app.dependency_overrides.pop(get_analyzer, None)


@pytest.mark.parametrize("eth_amount", ["NaN", "Infinity", "-Infinity"])
def test_analysis_rejects_non_finite_amount(client, coingecko_client, eth_amount):
    response = client.post(
        "/api/v1/analysis",
        content=f'{{"eth_amount": {eth_amount}}}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "INVALID_AMOUNT"
    coingecko_client.get_coin_markets.assert_not_called()
