import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import wraps
from typing import Any

from .constants import KEY_SEPARATOR
from .context import clear_current_method, current_method, invocation_scope
from .errors import InvalidPolicy, UnsupportedBackingStoreKind
from .interfaces import CacheInterceptorInterface, CacheInterface
from .models.directive import Directive
from .models.ttl_policy import CacheType, TimeUnit, TtlPolicy
from .registry import TtlRegistry
from .resolver import DirectiveResolver

logger = logging.getLogger(__name__)

_UNAVAILABLE = (ConnectionError, TimeoutError, asyncio.TimeoutError)


class TimedCacheInterceptor(CacheInterceptorInterface):
    """
    Applies the registered TtlPolicy of a cache name to reads and writes.

    Nothing raised by a store escapes ``get``, ``put`` or ``evict``: a missing,
    disabled or unusable policy, an unsupported cache type and any store
    failure all behave as if there were no cache.
    """

    def __init__(
        self,
        registry: TtlRegistry,
        stores: Mapping[CacheType, CacheInterface],
        resolver: DirectiveResolver | None = None,
    ) -> None:
        self.registry = registry
        self.stores = dict(stores)
        self.resolver = resolver

    def store_key(self, cache_name: str, key: str) -> str:
        return f"{cache_name}{KEY_SEPARATOR}{key}"

    def key_builder(self, directive: Directive, func: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
        if not directive.key:
            arg_str = str(args)
            kwarg_str = str(kwargs) if kwargs else "{}"
            func_name = getattr(func, "__name__", "unknown")
            return f"{func_name}:{arg_str}:{kwarg_str}"

        bound = inspect.signature(func).bind(*args, **kwargs)
        bound.apply_defaults()
        return directive.key.format(**bound.arguments)

    def _store_for(self, policy: TtlPolicy) -> CacheInterface:
        store = self.stores.get(policy.cache_type)  # type: ignore[arg-type]
        if store is None:
            raise UnsupportedBackingStoreKind(f"{policy.cache_type} cache type is not implemented.")
        return store

    def _resolve(self, cache_name: str) -> tuple[TtlPolicy, CacheInterface] | None:
        policy = self.registry.get(cache_name)
        if policy is None or policy.is_disabled:
            return None
        try:
            policy.validate()
            return policy, self._store_for(policy)
        except InvalidPolicy as e:
            logger.warning(f"Ignoring unusable TTL policy for cache {cache_name}: {e}")
        except UnsupportedBackingStoreKind as e:
            logger.warning(f"Skipping cache {cache_name}: {e}")
        return None

    async def get(self, cache_name: str, key: str) -> Any:
        resolved = self._resolve(cache_name)
        if resolved is None:
            return None
        _, store = resolved

        try:
            value = await store.get(self.store_key(cache_name, key))
        except _UNAVAILABLE as e:
            logger.warning(f"Cache store unavailable in get for cache {cache_name}: {e}, falling back.")
            return None
        except Exception as e:
            logger.error(f"Error in get for cache {cache_name}: {e}", exc_info=True)
            return None

        if value is not None:
            logger.debug(f"Method {current_method()} returned from cache {cache_name}")
            clear_current_method()
        return value

    async def put(self, cache_name: str, key: str, value: Any) -> None:
        resolved = self._resolve(cache_name)
        if resolved is None:
            return
        policy, store = resolved

        try:
            await store.set(
                self.store_key(cache_name, key),
                value,
                ttl=policy.ttl,
                time_unit=policy.time_unit,
            )
        except _UNAVAILABLE as e:
            logger.warning(f"Cache store unavailable in put for cache {cache_name}: {e}, value not cached.")
        except Exception as e:
            logger.error(f"Error in put for cache {cache_name}: {e}", exc_info=True)

    async def evict(self, cache_name: str, key: str) -> None:
        """Delete one entry. A disabled policy still evicts through its store."""
        policy = self.registry.get(cache_name)
        if policy is None:
            return
        try:
            store = self._store_for(policy)
        except UnsupportedBackingStoreKind as e:
            logger.warning(f"Skipping eviction for cache {cache_name}: {e}")
            return

        try:
            await store.delete(self.store_key(cache_name, key))
        except Exception as e:
            logger.error(f"Error in evict for cache {cache_name}: {e}")

    async def invoke(self, directive: Directive, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        cache_name = directive.cache_name
        with invocation_scope(getattr(func, "__name__", "unknown")):
            try:
                key = self.key_builder(directive, func, *args, **kwargs)
            except Exception as e:
                logger.error(f"Could not build cache key for cache {cache_name}: {e}")
                return await func(*args, **kwargs)

            cached_value = await self.get(cache_name, key)
            if cached_value is not None:
                return cached_value

            result = await func(*args, **kwargs)
            if result is not None:
                await self.put(cache_name, key, result)
            return result

    async def invoke_evict(
        self, directive: Directive, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> Any:
        """Run ``func`` and, once it succeeds, evict the entry its arguments map to."""
        result = await func(*args, **kwargs)
        try:
            key = self.key_builder(directive, func, *args, **kwargs)
        except Exception as e:
            logger.error(f"Could not build cache key for cache {directive.cache_name}: {e}")
            return result
        await self.evict(directive.cache_name, key)
        return result

    def __call__(self, directive: Directive) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        if self.resolver is not None:
            self.resolver.declare(directive)

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                return await self.invoke(directive, func, *args, **kwargs)

            return wrapper

        return decorator

    def cacheable(
        self,
        cache_names: str | tuple[str, ...],
        ttl: str | int,
        key: str = "",
        time_unit: TimeUnit | str | None = None,
        cache_type: CacheType = CacheType.REDIS,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        return self(Directive(cache_names, ttl, key=key, time_unit=time_unit, cache_type=cache_type))
