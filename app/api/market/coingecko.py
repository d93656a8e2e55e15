import logging
from decimal import ROUND_HALF_UP, Decimal

import httpx

from app.api.common.models import ApiError, ErrorKind
from app.config import settings
from app.core.metrics import track_upstream_call

from .cache import CoinMarketsCache
from .constants import (
    COINGECKO_MARKETS_PAGE_SIZE,
    COINGECKO_PRICE_CHANGE_WINDOW,
    ETHEREUM_COINGECKO_ID,
    MISSING_PRICE_CHANGE,
    NATIVE_COIN_IDS,
)
from .models import CoinMarket, EthPrice, NativeCoinChange

logger = logging.getLogger(__name__)


def round_percentage(value: float) -> float:
    """Two decimals, exact ties away from zero."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def select_top_native_coins(
    markets: list[CoinMarket], limit: int
) -> list[NativeCoinChange]:
    """
    Native coins from the allow-list, best 30-day performers first.

    Coins without a reported change rank as if they had lost 100%.
    """
    native = [market for market in markets if market.id in NATIVE_COIN_IDS]
    native.sort(
        key=lambda market: (
            market.price_change_percentage_30d_in_currency
            if market.price_change_percentage_30d_in_currency is not None
            else MISSING_PRICE_CHANGE
        ),
        reverse=True,
    )

    return [
        NativeCoinChange(
            name=market.name,
            symbol=market.symbol.upper(),
            price_change_30d=(
                round_percentage(market.price_change_percentage_30d_in_currency)
                if market.price_change_percentage_30d_in_currency is not None
                else None
            ),
        )
        for market in native[:limit]
    ]


def extract_eth_price(markets: list[CoinMarket]) -> EthPrice:
    """Current ETH price and the price implied 30 days ago by its change."""
    eth = next(
        (market for market in markets if market.id == ETHEREUM_COINGECKO_ID), None
    )
    if (
        eth is None
        or eth.current_price is None
        or eth.price_change_percentage_30d_in_currency is None
    ):
        raise ApiError(
            message="Failed to fetch ETH price",
            kind=ErrorKind.UPSTREAM_ERROR,
            status_code=502,
            details="Ethereum is missing from the CoinGecko markets response",
        )

    current = eth.current_price
    change = eth.price_change_percentage_30d_in_currency
    return EthPrice(
        current=current,
        month_ago=current - (change * current / 100),
        change=change,
    )


class CoinGeckoClient:
    def __init__(self):
        self.base_url = (
            "https://api.coingecko.com/api/v3"
            if not settings.COINGECKO_API_KEY
            else "https://pro-api.coingecko.com/api/v3"
        )

    @staticmethod
    def _create_client() -> httpx.AsyncClient:
        headers = (
            {"x-cg-pro-api-key": settings.COINGECKO_API_KEY}
            if settings.COINGECKO_API_KEY
            else None
        )
        return httpx.AsyncClient(timeout=10.0, headers=headers)

    async def get_coin_markets(self) -> list[CoinMarket]:
        """
        First page of USD market data, ordered by market cap, including the
        30-day price change. Served from cache when fresh.
        """
        if cached := await CoinMarketsCache.get():
            return cached

        params = {
            "vs_currency": "usd",
            "order": "market_cap_desc",
            "per_page": COINGECKO_MARKETS_PAGE_SIZE,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": COINGECKO_PRICE_CHANGE_WINDOW,
        }

        with track_upstream_call("coingecko", "coins_markets"):
            async with self._create_client() as client:
                response = await client.get(
                    f"{self.base_url}/coins/markets", params=params
                )
                response.raise_for_status()
                data = response.json()

        markets = []
        for item in data:
            try:
                markets.append(CoinMarket.model_validate(item))
            except ValueError as e:
                logger.warning(f"Skipping malformed CoinGecko market entry: {e}")

        await CoinMarketsCache.set(markets)
        return markets

    async def get_top_native_coins(
        self, limit: int | None = None
    ) -> list[NativeCoinChange]:
        markets = await self.get_coin_markets()
        return select_top_native_coins(markets, limit or settings.TOP_COINS_LIMIT)

    async def get_eth_price(self) -> EthPrice:
        markets = await self.get_coin_markets()
        return extract_eth_price(markets)
