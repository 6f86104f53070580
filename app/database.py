import logging
from redis.asyncio import Redis
from app.utils.redis import KVStore

logger = logging.getLogger(__name__)


class RedisManager:
    def __init__(self) -> None:
        self._redis: Redis | None = None

    async def init(self, redis_url: str):
        self._redis = Redis.from_url(redis_url, decode_responses=True)
        logger.info("Redis client configured for %s", redis_url)

    async def close(self):
        if self._redis is None:
            return
        await self._redis.aclose()
        self._redis = None

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            raise RuntimeError("RedisManager is not initialized")
        return self._redis


redis_manager = RedisManager()


def get_kv_store():
    yield KVStore(redis_manager.redis)
