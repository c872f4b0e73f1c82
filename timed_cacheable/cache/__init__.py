from collections.abc import Mapping

from ..config import PropertySource
from ..interceptor import TimedCacheInterceptor
from ..interfaces import CacheInterface, ConfigSource
from ..models import CacheType
from ..registry import TtlRegistry
from ..resolver import DirectiveResolver
from .in_memory.cache import InMemoryCache
from .redis.cache import RedisCache
from .redis.config import RedisClientConfig
from .valkey.cache import ValkeyCache
from .valkey.config import ValkeyClientConfig


class AsyncCacheInterceptorFactory:
    @classmethod
    async def from_stores(
        cls,
        stores: Mapping[CacheType, CacheInterface],
        config: ConfigSource | None = None,
        registry: TtlRegistry | None = None,
    ) -> TimedCacheInterceptor:
        registry = registry if registry is not None else TtlRegistry()
        resolver = DirectiveResolver(config if config is not None else PropertySource(), registry)
        return TimedCacheInterceptor(registry, stores, resolver=resolver)

    @classmethod
    async def inmemory(
        cls, config: ConfigSource | None = None, registry: TtlRegistry | None = None
    ) -> TimedCacheInterceptor:
        # Stands in for the REDIS cache type so directives need no change in development.
        return await cls.from_stores({CacheType.REDIS: InMemoryCache()}, config, registry)

    @classmethod
    async def redis(
        cls,
        redis_config: RedisClientConfig | None = None,
        config: ConfigSource | None = None,
        registry: TtlRegistry | None = None,
    ) -> TimedCacheInterceptor:
        return await cls.from_stores({CacheType.REDIS: RedisCache(redis_config)}, config, registry)

    @classmethod
    async def valkey(
        cls,
        valkey_config: ValkeyClientConfig | None = None,
        config: ConfigSource | None = None,
        registry: TtlRegistry | None = None,
    ) -> TimedCacheInterceptor:
        if valkey_config is None:
            valkey_config = ValkeyClientConfig.localhost()
        cache = await ValkeyCache.create(valkey_config)
        return await cls.from_stores({CacheType.VALKEY: cache}, config, registry)


__all__ = [
    "AsyncCacheInterceptorFactory",
    "InMemoryCache",
    "RedisCache",
    "RedisClientConfig",
    "ValkeyCache",
    "ValkeyClientConfig",
]
