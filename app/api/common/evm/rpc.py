"""Alchemy JSON-RPC client for Ethereum mainnet."""

import logging
from typing import Any, Literal

import httpx
from pydantic import BaseModel

from app.api.common.models import ApiError, ErrorKind
from app.api.common.units import parse_quantity, to_quantity
from app.config import settings
from app.core.metrics import track_upstream_call

logger = logging.getLogger(__name__)

# Alchemy RPC URL template
ALCHEMY_RPC_URL_TEMPLATE = "https://{network}.g.alchemy.com/v2/{api_key}"

BlockTag = int | Literal["latest"]


class AlchemyRPCError(Exception):
    """Raised when Alchemy answers a JSON-RPC call with an error member."""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        message = error.get("message") if isinstance(error, dict) else error
        super().__init__(f"{method} failed: {message}")


class Block(BaseModel):
    number: int
    timestamp: int


def _encode_block_tag(tag: BlockTag) -> str:
    if tag == "latest":
        return tag
    return to_quantity(tag)


class AlchemyClient:
    def __init__(self, api_key: str | None = None, network: str | None = None):
        api_key = api_key or settings.ALCHEMY_API_KEY
        if not api_key:
            raise ApiError(
                message="Wallet lookups are not configured",
                kind=ErrorKind.NOT_CONFIGURED,
                status_code=503,
                details="ALCHEMY_API_KEY is not set",
            )

        self.network = network or settings.ALCHEMY_NETWORK
        self.rpc_url = ALCHEMY_RPC_URL_TEMPLATE.format(
            network=self.network, api_key=api_key
        )

    @staticmethod
    def _create_client() -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=10.0)

    async def _call(self, method: str, params: list) -> Any:
        with track_upstream_call("alchemy", method):
            async with self._create_client() as client:
                response = await client.post(
                    self.rpc_url,
                    json={
                        "jsonrpc": "2.0",
                        "id": 1,
                        "method": method,
                        "params": params,
                    },
                )
                response.raise_for_status()
                data = response.json()

            if "error" in data:
                raise AlchemyRPCError(method, data["error"])

            return data.get("result")

    async def get_block(self, tag: BlockTag) -> Block:
        result = await self._call(
            "eth_getBlockByNumber", [_encode_block_tag(tag), False]
        )
        if not result:
            raise AlchemyRPCError("eth_getBlockByNumber", f"block {tag} not found")

        return Block(
            number=parse_quantity(result["number"]),
            timestamp=parse_quantity(result["timestamp"]),
        )

    async def get_balance(self, address: str, tag: BlockTag = "latest") -> int:
        """Get the ETH balance of an account at a block, in wei."""
        result = await self._call("eth_getBalance", [address, _encode_block_tag(tag)])

        balance = parse_quantity(result)
        if balance is None:
            raise AlchemyRPCError("eth_getBalance", f"malformed balance {result!r}")
        return balance

    async def get_latest_transfer_block(self, address: str) -> int | None:
        """
        Block number of the most recent external or internal transfer sent
        from the address, or None if there is none or the lookup fails.
        """
        try:
            result = await self._call(
                "alchemy_getAssetTransfers",
                [
                    {
                        "fromAddress": address,
                        "category": ["external", "internal"],
                        "order": "desc",
                        "maxCount": to_quantity(1),
                    }
                ],
            )
        except (httpx.HTTPError, AlchemyRPCError) as e:
            logger.warning(f"Failed to fetch latest transfer for {address}: {e}")
            return None

        transfers = (result or {}).get("transfers", [])
        if not transfers:
            logger.info(f"No transfers found for {address}")
            return None

        return parse_quantity(transfers[0].get("blockNum"))
