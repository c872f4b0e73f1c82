from dataclasses import dataclass
from typing import Any


@dataclass
class CacheItem:
    value: Any
    expire_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expire_at is not None and now >= self.expire_at
