import httpx
from fastapi import APIRouter, Depends, Query

from app.api.common.annotations import TOP_COINS_LIMIT_DESCRIPTION
from app.api.common.models import ApiError, ErrorKind, ErrorResponse, Tags

from .coingecko import CoinGeckoClient
from .models import EthPrice, TopCoinsResponse

router = APIRouter(tags=[Tags.MARKET], responses={502: {"model": ErrorResponse}})


def get_coingecko_client() -> CoinGeckoClient:
    return CoinGeckoClient()


@router.get("/top-coins", response_model=TopCoinsResponse)
async def get_top_coins(
    limit: int | None = Query(
        default=None, ge=1, le=50, description=TOP_COINS_LIMIT_DESCRIPTION
    ),
    coingecko_client: CoinGeckoClient = Depends(get_coingecko_client),
) -> TopCoinsResponse:
    """Best performing native coins over the last 30 days."""
    try:
        coins = await coingecko_client.get_top_native_coins(limit)
    except httpx.HTTPError as e:
        raise ApiError(
            message="Failed to fetch top coins",
            kind=ErrorKind.UPSTREAM_ERROR,
            status_code=502,
            details=str(e),
        )

    return TopCoinsResponse(symbol_change_array=coins)


@router.get("/eth-price", response_model=EthPrice)
async def get_eth_price(
    coingecko_client: CoinGeckoClient = Depends(get_coingecko_client),
) -> EthPrice:
    """Current ETH price, its 30-day change and the implied price 30 days ago."""
    try:
        return await coingecko_client.get_eth_price()
    except httpx.HTTPError as e:
        raise ApiError(
            message="Failed to fetch ETH price",
            kind=ErrorKind.UPSTREAM_ERROR,
            status_code=502,
            details=str(e),
        )
