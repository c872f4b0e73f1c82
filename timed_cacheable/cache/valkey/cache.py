import pickle
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from glide import ClosingError, ExpirySet, ExpiryType, FlushMode, GlideClient, GlideError
from glide import ConnectionError as GlideConnectionError
from glide import TimeoutError as GlideTimeoutError

from ...errors import StoreOperationFailed, StoreUnavailable
from ...interfaces.cache import CacheInterface
from ...models import TimeUnit
from .config import ValkeyClientConfig


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (GlideConnectionError, GlideTimeoutError, ClosingError) as e:
        raise StoreUnavailable(f"Valkey {operation} failed: {e}") from e
    except GlideError as e:
        raise StoreOperationFailed(f"Valkey {operation} failed: {e}") from e


class ValkeyCache(CacheInterface):
    _config: ValkeyClientConfig
    _client: GlideClient

    # Recommend initialize with create method, not directly
    def __init__(self, config: ValkeyClientConfig, client: GlideClient):
        self._config = config
        self._client = client

    @classmethod
    async def create(cls, config: ValkeyClientConfig) -> "ValkeyCache":
        with _store_errors("connect"):
            client = await GlideClient.create(config.to_glide_config())
        return cls(config, client)

    @property
    def config(self) -> ValkeyClientConfig:
        return self._config

    async def get(self, key: str) -> Any:
        with _store_errors("get"):
            data = await self._client.get(key)
        if data is None:
            return None
        return pickle.loads(data)  # noqa: S301

    async def set(self, key: str, value: Any, ttl: int | None = None, time_unit: TimeUnit = TimeUnit.SECONDS) -> None:
        serialized_value = pickle.dumps(value)
        with _store_errors("set"):
            if ttl is not None:
                ttl_ms = time_unit.to_seconds(ttl) * 1000
                expiry = ExpirySet(expiry_type=ExpiryType.MILLSEC, value=ttl_ms)
                await self._client.set(key, serialized_value, expiry=expiry)
            else:
                await self._client.set(key, serialized_value)

    async def exists(self, key: str) -> bool:
        with _store_errors("exists"):
            return await self._client.exists([key]) == 1

    async def delete(self, key: str) -> None:
        with _store_errors("delete"):
            await self._client.delete([key])

    async def clear(self) -> None:
        with _store_errors("flushdb"):
            await self._client.flushdb(flush_mode=FlushMode.ASYNC)

    async def ping(self) -> None:
        with _store_errors("ping"):
            await self._client.ping()

    async def close(self) -> None:
        await self._client.close()
