import json
import logging
from typing import Any, Protocol

from redis.asyncio import Redis

module_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def close(self) -> None: ...


class RedisStore:
    """JSON values kept under plain Redis string keys."""

    def __init__(self, redis: Redis):
        self.redis = redis

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Any | None:
        raw = await self.redis.get(key)
        if raw is None:
            return None

        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            module_logger.warning(f"Key {key} does not hold JSON, using raw value")
            return raw

        # values written as a JSON string of a JSON document
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value

        return value

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(key, json.dumps(value))

    async def close(self) -> None:
        await self.redis.aclose()
