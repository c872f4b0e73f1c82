from abc import ABC, abstractmethod
from typing import Any

from ..models.ttl_policy import TimeUnit


class CacheInterface(ABC):
    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None, time_unit: TimeUnit = TimeUnit.SECONDS) -> None:
        pass

    @abstractmethod
    async def get(self, key: str) -> Any:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str) -> Any:
        pass

    @abstractmethod
    async def clear(self) -> Any:
        pass

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
