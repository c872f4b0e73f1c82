import time
from typing import Any

from ...interfaces import CacheInterface
from ...models import CacheItem, TimeUnit


class InMemoryCache(CacheInterface):
    """Process-local store with per-key expiry, for development and tests."""

    def __init__(self) -> None:
        self.cache: dict[str, CacheItem] = {}

    async def set(self, key: str, value: Any, ttl: int | None = None, time_unit: TimeUnit = TimeUnit.SECONDS) -> None:
        expire_at = time.time() + time_unit.to_seconds(ttl) if ttl is not None else None
        self.cache[key] = CacheItem(value, expire_at)

    async def get(self, key: str) -> Any:
        item = self.cache.get(key)
        if item is None:
            return None
        if not item.is_expired(time.time()):
            return item.value
        self.cache.pop(key, None)  # Remove expired item
        return None

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def delete(self, key: str) -> None:
        self.cache.pop(key, None)

    async def clear(self) -> None:
        self.cache.clear()
