import json
import re
from typing import Any
from redis.asyncio import Redis
from app.exceptions import StorageError


_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_pattern(value: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        try:
            return super().default(obj)
        except TypeError:
            return str(obj)


class KVStore:
    """JSON values stored under string keys in Redis."""

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    @staticmethod
    def _decode(key: str, raw: str | bytes) -> Any:
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageError(f"Malformed value stored under {key}") from e

    async def get(self, key: str) -> Any | None:
        raw = await self.redis.get(key)
        if raw is None:
            return None
        return self._decode(key, raw)

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(key, json.dumps(value, cls=CustomJSONEncoder))

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def get_by_prefix(self, prefix: str) -> list[Any]:
        pattern = f"{escape_pattern(prefix)}*"
        # SCAN may return a key more than once
        keys = list(dict.fromkeys([key async for key in self.redis.scan_iter(match=pattern)]))
        if not keys:
            return []
        values = await self.redis.mget(keys)
        # keys may expire or be deleted between SCAN and MGET
        return [
            self._decode(key, value)
            for key, value in zip(keys, values)
            if value is not None
        ]
