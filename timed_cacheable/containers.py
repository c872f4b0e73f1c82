from dependency_injector import containers, providers

from .cache.redis.cache import RedisCache
from .cache.redis.config import RedisClientConfig
from .config import PropertySource
from .interceptor import TimedCacheInterceptor
from .models import CacheType
from .refresh import RefreshCoordinator
from .registry import TtlRegistry
from .resolver import DirectiveResolver


class CacheContainer(containers.DeclarativeContainer):
    """
    Wires the TTL caching core for an application.

    Load ``config`` with the ``cache`` section (per-cache ttl/timeUnit/cacheType
    and ``cache.default``) and a ``redis`` section for the store connection.
    Override ``stores`` to plug in other backends.
    """

    config = providers.Configuration()

    property_source = providers.Singleton(PropertySource, config.provider)

    registry = providers.Singleton(TtlRegistry)

    resolver = providers.Singleton(DirectiveResolver, config=property_source, registry=registry)

    redis_config = providers.Singleton(RedisClientConfig.from_section, config.redis)

    redis_cache = providers.Singleton(RedisCache, config=redis_config)

    stores = providers.Dict({CacheType.REDIS: redis_cache})

    interceptor = providers.Singleton(TimedCacheInterceptor, registry=registry, stores=stores, resolver=resolver)

    refresh_coordinator = providers.Singleton(RefreshCoordinator, config=property_source, registry=registry)
