import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisSessionStore:
    """Сессии в Redis/Valkey: ключ живет ровно TTL и не продлевается"""

    def __init__(self, redis: Redis):
        self._redis = redis

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._redis.set(key, value, ex=ttl_seconds)

    async def get(self, key: str) -> Optional[str]:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def is_healthy(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {str(e)}")
            return False
