import pickle
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ...errors import StoreOperationFailed, StoreUnavailable
from ...interfaces import CacheInterface
from ...models import TimeUnit
from .config import RedisClientConfig


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        raise StoreUnavailable(f"Redis {operation} failed: {e}") from e
    except RedisError as e:
        raise StoreOperationFailed(f"Redis {operation} failed: {e}") from e


class RedisCache(CacheInterface):
    def __init__(self, config: RedisClientConfig | None = None, client: Any = None):
        self._config = config if config is not None else RedisClientConfig.localhost()
        self.redis = client if client is not None else self._config.create_client()

    @property
    def config(self) -> RedisClientConfig:
        return self._config

    async def set(self, key: str, value: Any, ttl: int | None = None, time_unit: TimeUnit = TimeUnit.SECONDS) -> None:
        pickled_value = pickle.dumps(value)
        with _store_errors("set"):
            if ttl is not None:
                await self.redis.set(key, pickled_value, ex=time_unit.to_seconds(ttl))
            else:
                await self.redis.set(key, pickled_value)

    async def get(self, key: str) -> Any:
        with _store_errors("get"):
            data = await self.redis.get(key)
        if data is None:
            return None
        return pickle.loads(data)  # noqa: S301

    async def exists(self, key: str) -> bool:
        with _store_errors("exists"):
            return bool((await self.redis.exists(key)) == 1)

    async def delete(self, key: str) -> None:
        with _store_errors("delete"):
            await self.redis.delete(key)

    async def clear(self) -> None:
        with _store_errors("flushdb"):
            await self.redis.flushdb()

    async def ping(self) -> None:
        with _store_errors("ping"):
            await self.redis.ping()

    async def close(self) -> None:
        await self.redis.aclose()
