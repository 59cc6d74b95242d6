import json
import logging

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisJobQueue:
    """Очередь задач на списке Redis.

    Ядро только кладет задачу и не ждет подтверждения от воркера,
    так что доставка с его стороны "не более одного раза".
    """

    def __init__(self, redis: Redis, name: str):
        self._redis = redis
        self.name = name

    async def enqueue(self, payload: dict) -> None:
        await self._redis.rpush(self.name, json.dumps(payload))
        logger.info(f"Job queued to {self.name}: {payload}")
