from collections.abc import Callable
from functools import wraps
from types import MethodType
from typing import Any, TypeVar

from .interceptor import TimedCacheInterceptor
from .models import CacheType, Directive, TimeUnit

F = TypeVar("F", bound=Callable[..., Any])

DIRECTIVE_ATTR = "__timed_cacheable__"


class TimedCacheableClass:
    """
    Base class for services whose async methods are cached per cache name.

    Directives declared with ``TimedCacheableClass.cache`` are resolved and
    registered when the first instance of a class is created, so a
    misconfigured cache name is reported at startup and simply runs uncached
    afterwards. Later instances leave the registry to refreshes.
    """

    def __init__(self, cache_interceptor: TimedCacheInterceptor) -> None:
        self._cache_interceptor = cache_interceptor
        if cache_interceptor.resolver is not None:
            cache_interceptor.resolver.declare_for(type(self), self.directives())

    @classmethod
    def directives(cls) -> list[Directive]:
        found: dict[str, Directive] = {}
        for klass in reversed(cls.__mro__):
            for attr in vars(klass).values():
                directive = getattr(attr, DIRECTIVE_ATTR, None)
                if isinstance(directive, Directive):
                    found[directive.cache_name] = directive
        return list(found.values())

    @classmethod
    def cache(
        cls,
        cache_names: str | tuple[str, ...],
        ttl: str | int,
        key: str = "",
        time_unit: TimeUnit | str | None = None,
        cache_type: CacheType = CacheType.REDIS,
        sync: bool = False,
        condition: str = "",
        unless: str = "",
    ) -> Callable[[F], F]:
        directive = Directive(
            cache_names,
            ttl,
            key=key,
            time_unit=time_unit,
            cache_type=cache_type,
            sync=sync,
            condition=condition,
            unless=unless,
        )

        def decorator(func: F) -> F:
            @wraps(func)
            async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                if not hasattr(self, "_cache_interceptor"):
                    raise AttributeError("_cache_interceptor not found. Did you call super().__init__?")
                return await self._cache_interceptor.invoke(directive, MethodType(func, self), *args, **kwargs)

            setattr(wrapper, DIRECTIVE_ATTR, directive)
            return wrapper  # type: ignore

        return decorator

    @classmethod
    def evict(cls, cache_name: str, key: str = "") -> Callable[[F], F]:
        """Evict the entry of ``cache_name`` built from ``key`` after the method returns."""
        directive = Directive(cache_name, ttl=0, key=key)

        def decorator(func: F) -> F:
            @wraps(func)
            async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                if not hasattr(self, "_cache_interceptor"):
                    raise AttributeError("_cache_interceptor not found. Did you call super().__init__?")
                return await self._cache_interceptor.invoke_evict(directive, MethodType(func, self), *args, **kwargs)

            return wrapper  # type: ignore

        return decorator
