from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from ..models.directive import Directive


class CacheInterceptorInterface(ABC):
    @abstractmethod
    async def get(self, cache_name: str, key: str) -> Any:
        pass

    @abstractmethod
    async def put(self, cache_name: str, key: str, value: Any) -> None:
        pass

    @abstractmethod
    async def invoke(self, directive: Directive, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        pass

    @abstractmethod
    def __call__(self, directive: Directive) -> Callable:
        pass
