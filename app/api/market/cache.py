import json
from datetime import datetime, timedelta

from cachetools import TTLCache

from app.core.cache import Cache

from .models import CoinMarket


class CoinMarketsCache:
    """Two-level cache for the CoinGecko markets snapshot.

    Level 1: Memory cache (TTLCache)
    - 30-second TTL, cleared on restart
    - Shared by the top coins and ETH price lookups of a single analysis

    Level 2: Redis cache
    - 1-minute TTL, shared between workers
    - Populates memory cache on miss
    """

    CACHE_KEY = "coingecko:markets:usd:30d"
    REDIS_TTL = timedelta(minutes=1)

    MEMCACHE_KEY = "markets"
    MEMCACHE_TTL = timedelta(seconds=30)
    memcache = TTLCache(maxsize=1, ttl=MEMCACHE_TTL, timer=datetime.now)

    @classmethod
    async def get(cls) -> list[CoinMarket] | None:
        # Check memory cache first
        if cls.MEMCACHE_KEY in cls.memcache:
            return cls.memcache[cls.MEMCACHE_KEY]

        async with Cache.get_client() as redis:
            data_json = await redis.get(cls.CACHE_KEY)
            if not data_json:
                return None

            markets = [CoinMarket.model_validate(item) for item in json.loads(data_json)]

            cls.memcache[cls.MEMCACHE_KEY] = markets
            return markets

    @classmethod
    async def set(
        cls, markets: list[CoinMarket], ttl: timedelta = REDIS_TTL
    ) -> None:
        cls.memcache[cls.MEMCACHE_KEY] = markets

        async with Cache.get_client() as redis:
            data = [market.model_dump() for market in markets]
            await redis.setex(cls.CACHE_KEY, ttl, json.dumps(data))

    @classmethod
    def clear(cls) -> None:
        cls.memcache.clear()
