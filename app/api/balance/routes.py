import httpx
from fastapi import APIRouter, Depends, Path

from app.api.common.annotations import WALLET_ADDRESS_DESCRIPTION
from app.api.common.evm.rpc import AlchemyRPCError
from app.api.common.models import ApiError, ErrorKind, ErrorResponse, Tags
from app.api.common.utils import is_evm_address

from .models import HistoricalBalance
from .service import BalanceService

router = APIRouter(
    tags=[Tags.BALANCE],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)


def valid_wallet_address(
    wallet_address: str = Path(..., description=WALLET_ADDRESS_DESCRIPTION),
) -> str:
    if not is_evm_address(wallet_address):
        raise ApiError.from_kind(ErrorKind.INVALID_ADDRESS)
    return wallet_address


def get_balance_service() -> BalanceService:
    return BalanceService()


async def lookup_balance(service: BalanceService, address: str) -> HistoricalBalance:
    try:
        return await service.get_eth_balance_month_back(address)
    except (httpx.HTTPError, AlchemyRPCError) as e:
        raise ApiError(
            message="Failed to retrieve balance",
            kind=ErrorKind.UPSTREAM_ERROR,
            status_code=502,
            details=str(e),
        )


@router.get("/balance/{wallet_address}", response_model=float)
async def get_balance(
    wallet_address: str = Depends(valid_wallet_address),
    service: BalanceService = Depends(get_balance_service),
) -> float:
    """ETH balance one month ago, as a bare number."""
    result = await lookup_balance(service, wallet_address)
    return result.balance


@router.get("/v1/balance/{wallet_address}", response_model=HistoricalBalance)
async def get_balance_details(
    wallet_address: str = Depends(valid_wallet_address),
    service: BalanceService = Depends(get_balance_service),
) -> HistoricalBalance:
    """
    ETH balance one month ago, along with the block it was read at and how
    that block was chosen.
    """
    return await lookup_balance(service, wallet_address)
