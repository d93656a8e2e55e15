import asyncio
import logging
import math

import httpx

from app.api.balance.service import BalanceService
from app.api.common.evm.rpc import AlchemyRPCError
from app.api.common.models import ApiError, ErrorKind
from app.api.common.utils import is_evm_address
from app.api.market.coingecko import (
    CoinGeckoClient,
    extract_eth_price,
    select_top_native_coins,
)
from app.config import settings
from app.core.metrics import record_analysis

from .calculator import build_portfolio, compare_coins
from .models import AnalysisRequest, AnalysisResponse, InputMode

logger = logging.getLogger(__name__)


class WhatIfAnalyzer:
    def __init__(
        self,
        coingecko_client: CoinGeckoClient | None = None,
        balance_service: BalanceService | None = None,
    ):
        self.coingecko_client = coingecko_client or CoinGeckoClient()
        # Built lazily, manual entries never need Alchemy
        self._balance_service = balance_service

    @property
    def balance_service(self) -> BalanceService:
        if self._balance_service is None:
            self._balance_service = BalanceService()
        return self._balance_service

    @staticmethod
    def validate(request: AnalysisRequest) -> None:
        if request.mode == InputMode.MANUAL:
            amount = request.eth_amount
            if amount is None or not math.isfinite(amount) or amount <= 0:
                raise ApiError.from_kind(ErrorKind.INVALID_AMOUNT)
        elif not is_evm_address(request.address):
            raise ApiError.from_kind(ErrorKind.INVALID_ADDRESS)

    async def _get_balance(self, request: AnalysisRequest) -> float:
        if request.mode == InputMode.MANUAL:
            return request.eth_amount

        try:
            result = await self.balance_service.get_eth_balance_month_back(
                request.address
            )
        except (httpx.HTTPError, AlchemyRPCError) as e:
            raise ApiError(
                message="Failed to retrieve balance",
                kind=ErrorKind.UPSTREAM_ERROR,
                status_code=502,
                details=str(e),
            )
        return result.balance

    async def _get_markets(self):
        try:
            return await self.coingecko_client.get_coin_markets()
        except httpx.HTTPError as e:
            raise ApiError(
                message="Failed to fetch market data",
                kind=ErrorKind.UPSTREAM_ERROR,
                status_code=502,
                details=str(e),
            )

    async def analyze(self, request: AnalysisRequest) -> AnalysisResponse:
        mode = request.mode
        try:
            self.validate(request)

            balance, markets = await asyncio.gather(
                self._get_balance(request), self._get_markets()
            )
            if balance <= 0:
                raise ApiError.from_kind(ErrorKind.NO_BALANCE)

            portfolio = build_portfolio(balance, extract_eth_price(markets))
            coins = select_top_native_coins(markets, settings.TOP_COINS_LIMIT)
            comparisons = compare_coins(coins, portfolio)
        except ApiError as e:
            record_analysis(mode.value, e.kind.value)
            raise

        record_analysis(mode.value, "OK")
        logger.info(
            f"Analyzed {balance} ETH ({mode.value}) against {len(comparisons)} coins"
        )
        return AnalysisResponse(eth=portfolio, comparisons=comparisons)
