import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import InvalidCacheType, InvalidPolicy, InvalidTimeUnit

logger = logging.getLogger(__name__)


class TimeUnit(str, Enum):
    SECONDS = "s"
    MINUTES = "m"
    HOURS = "h"

    @property
    def seconds(self) -> int:
        return _UNIT_SECONDS[self]

    def to_seconds(self, amount: int) -> int:
        return amount * self.seconds

    @classmethod
    def parse(cls, token: str) -> "TimeUnit":
        """Strict parsing of a configuration token: only ``s``, ``m`` and ``h`` are accepted."""
        for unit in cls:
            if token == unit.value:
                return unit
        raise InvalidTimeUnit(f"Invalid timeUnit: {token}")

    @classmethod
    def coerce(cls, value: Any, default: "TimeUnit | None" = None) -> "TimeUnit":
        """
        Lenient conversion used for a directive's explicit unit.
        Accepts a TimeUnit, a token (``s``/``m``/``h``) or a member name.
        Anything else falls back to ``default`` (minutes).
        """
        fallback = default if default is not None else cls.MINUTES
        if value is None:
            return fallback
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for unit in cls:
                if text == unit.value or text.upper() == unit.name:
                    return unit
        logger.warning(f"Unrecognized time unit {value!r}, using {fallback.name}")
        return fallback


_UNIT_SECONDS = {TimeUnit.SECONDS: 1, TimeUnit.MINUTES: 60, TimeUnit.HOURS: 3600}


class CacheType(str, Enum):
    REDIS = "REDIS"
    VALKEY = "VALKEY"
    HAZELCAST = "HAZELCAST"

    @classmethod
    def parse(cls, value: "str | CacheType") -> "CacheType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise InvalidCacheType(f"Invalid cacheType: {value}") from e


@dataclass(frozen=True)
class TtlPolicy:
    """
    Resolved TTL settings for one cache name.

    A negative ``ttl`` is a valid, registered state meaning caching is disabled
    for that name, so the constructor does not validate. Consumers call
    ``validate()`` before using a policy to talk to a store.
    """

    ttl: int
    time_unit: TimeUnit | None = TimeUnit.MINUTES
    cache_type: CacheType | None = CacheType.REDIS

    @property
    def is_disabled(self) -> bool:
        return self.ttl < 0

    @property
    def ttl_seconds(self) -> int:
        if self.time_unit is None:
            raise InvalidPolicy("TimeUnit must not be None")
        return self.time_unit.to_seconds(self.ttl)

    def validate(self) -> None:
        if self.ttl <= 0:
            raise InvalidPolicy("TTL must be positive")
        if self.time_unit is None:
            raise InvalidPolicy("TimeUnit must not be None")
        if self.cache_type is None:
            raise InvalidPolicy("CacheType must not be None")
