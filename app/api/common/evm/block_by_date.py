"""Find the block that was current at a given moment."""

import logging
import math
from datetime import datetime

from cachetools import LRUCache

from .rpc import AlchemyClient, Block

logger = logging.getLogger(__name__)

# Post-merge slot time
ESTIMATED_BLOCK_TIME = 12
# Interpolation converges quickly on a near-linear chain, bisect afterwards
MAX_INTERPOLATION_ROUNDS = 6

# Block timestamps never change once mined
_block_timestamp_cache: LRUCache[int, int] = LRUCache(maxsize=4096)


class BlockDater:
    """
    Resolve a datetime to the first block whose timestamp is at or after it.

    Moments at or after the chain head resolve to the head, moments before the
    first block resolve to block 0.
    """

    def __init__(self, client: AlchemyClient):
        self.client = client

    async def _get_block(self, number: int) -> Block:
        if number in _block_timestamp_cache:
            return Block(number=number, timestamp=_block_timestamp_cache[number])

        block = await self.client.get_block(number)
        _block_timestamp_cache[number] = block.timestamp
        return block

    async def get_block_at(self, moment: datetime) -> int:
        target = int(moment.timestamp())

        head = await self.client.get_block("latest")
        if target >= head.timestamp:
            return head.number

        # Invariant: lower.timestamp < target <= upper.timestamp
        upper = head
        gap = max(math.ceil((head.timestamp - target) / ESTIMATED_BLOCK_TIME), 1)
        while True:
            guess = max(upper.number - gap, 0)
            lower = await self._get_block(guess)
            if lower.timestamp < target:
                break
            if guess == 0:
                return 0
            upper = lower
            gap *= 2

        rounds = 0
        while upper.number - lower.number > 1:
            if rounds < MAX_INTERPOLATION_ROUNDS:
                span = upper.timestamp - lower.timestamp
                offset = (target - lower.timestamp) * (upper.number - lower.number)
                candidate = lower.number + offset // span
            else:
                candidate = (lower.number + upper.number) // 2
            candidate = min(max(candidate, lower.number + 1), upper.number - 1)
            rounds += 1

            block = await self._get_block(candidate)
            if block.timestamp < target:
                lower = block
            else:
                upper = block

        logger.debug(f"Resolved {moment.isoformat()} to block {upper.number}")
        return upper.number
