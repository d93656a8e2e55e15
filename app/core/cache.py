from contextlib import asynccontextmanager
from typing import AsyncGenerator

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.config import settings


class Cache:
    _redis_client: redis.Redis | None = None

    @classmethod
    async def init(cls) -> None:
        cls._redis_client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            decode_responses=True,
        )

    @classmethod
    @asynccontextmanager
    async def get_client(cls) -> AsyncGenerator[redis.Redis, None]:
        """Get Redis client, connecting lazily on first use"""
        if cls._redis_client is None:
            await cls.init()
        yield cls._redis_client

    @classmethod
    async def ping(cls) -> bool:
        if not cls._redis_client:
            return False
        try:
            return await cls._redis_client.ping()
        except RedisError:
            return False

    @classmethod
    async def close(cls) -> None:
        if cls._redis_client:
            await cls._redis_client.aclose()
            cls._redis_client = None
