import logging
from datetime import datetime, timedelta, timezone

from app.api.common.evm.block_by_date import BlockDater
from app.api.common.evm.rpc import AlchemyClient
from app.api.common.units import format_ether
from app.config import settings

from .models import BlockSource, HistoricalBalance

logger = logging.getLogger(__name__)


class BalanceService:
    def __init__(self, client: AlchemyClient | None = None):
        self.client = client or AlchemyClient()
        self.dater = BlockDater(self.client)

    async def get_eth_balance_month_back(
        self, address: str, now: datetime | None = None
    ) -> HistoricalBalance:
        """
        ETH balance of the address one lookback window ago.

        When that balance is zero the lookup falls back to the block of the
        address's most recent outgoing transfer, then to the chain head.
        """
        moment = (now or datetime.now(timezone.utc)) - timedelta(
            days=settings.LOOKBACK_DAYS
        )

        block_number: int | None = await self.dater.get_block_at(moment)
        block_source = BlockSource.HISTORICAL

        balance_wei = await self.client.get_balance(address, block_number)
        if balance_wei == 0:
            logger.info(
                f"No balance for {address} at block {block_number}, "
                "falling back to latest transfer block"
            )
            block_number = await self.client.get_latest_transfer_block(address)
            block_source = BlockSource.LATEST_TRANSFER

            if block_number is None:
                logger.info(f"No transfers for {address}, using latest block")
                block_source = BlockSource.LATEST_BLOCK

            balance_wei = await self.client.get_balance(
                address, block_number if block_number is not None else "latest"
            )

        return HistoricalBalance(
            address=address,
            balance=float(format_ether(balance_wei)),
            balance_wei=str(balance_wei),
            block_number=block_number,
            block_source=block_source,
            timestamp=moment,
        )
