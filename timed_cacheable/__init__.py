from .base import TimedCacheableClass
from .cache import (
    AsyncCacheInterceptorFactory,
    InMemoryCache,
    RedisCache,
    RedisClientConfig,
    ValkeyCache,
    ValkeyClientConfig,
)
from .config import PropertySource
from .errors import (
    InvalidCacheType,
    InvalidPolicy,
    InvalidTimeUnit,
    InvalidTtlValue,
    MalformedExpression,
    MissingTimeUnitConfiguration,
    MissingTtlConfiguration,
    ResolutionError,
    StoreError,
    StoreOperationFailed,
    StoreUnavailable,
    TimedCacheError,
    UnsupportedBackingStoreKind,
)
from .interceptor import TimedCacheInterceptor
from .interfaces import CacheInterceptorInterface, CacheInterface, ConfigSource
from .models import CacheItem, CacheType, Directive, TimeUnit, TtlPolicy
from .refresh import RefreshCoordinator
from .registry import PolicyRef, TtlRegistry
from .resolver import DirectiveResolver

__all__ = [
    "AsyncCacheInterceptorFactory",
    "CacheInterceptorInterface",
    "CacheInterface",
    "CacheItem",
    "CacheType",
    "ConfigSource",
    "Directive",
    "DirectiveResolver",
    "InMemoryCache",
    "InvalidCacheType",
    "InvalidPolicy",
    "InvalidTimeUnit",
    "InvalidTtlValue",
    "MalformedExpression",
    "MissingTimeUnitConfiguration",
    "MissingTtlConfiguration",
    "PolicyRef",
    "PropertySource",
    "RedisCache",
    "RedisClientConfig",
    "RefreshCoordinator",
    "ResolutionError",
    "StoreError",
    "StoreOperationFailed",
    "StoreUnavailable",
    "TimeUnit",
    "TimedCacheError",
    "TimedCacheInterceptor",
    "TimedCacheableClass",
    "TtlPolicy",
    "TtlRegistry",
    "UnsupportedBackingStoreKind",
    "ValkeyCache",
    "ValkeyClientConfig",
]
