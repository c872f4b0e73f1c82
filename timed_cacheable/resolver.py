import logging
import re
import threading
from collections.abc import Iterable

from .constants import CACHE_PREFIX, CACHE_TYPE, DEFAULT_CACHE_NAME, TIME_UNIT, TTL
from .errors import (
    InvalidTtlValue,
    MalformedExpression,
    MissingTimeUnitConfiguration,
    MissingTtlConfiguration,
    ResolutionError,
)
from .interfaces.config import ConfigSource
from .models.directive import Directive
from .models.ttl_policy import CacheType, TimeUnit, TtlPolicy
from .registry import TtlRegistry

logger = logging.getLogger(__name__)

TTL_EXPRESSION = re.compile(r"\$\{(cache\.[a-zA-Z][a-zA-Z0-9]*)}")

DEFAULT_BASE = f"{CACHE_PREFIX}.{DEFAULT_CACHE_NAME}"


def is_literal_ttl(ttl: str | int) -> bool:
    if isinstance(ttl, bool):
        return False
    if isinstance(ttl, int):
        return True
    return ttl.isascii() and ttl.isdigit()


def parse_ttl(raw: str, key: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise InvalidTtlValue(f"Invalid ttl value {raw!r} for {key}") from e


class DirectiveResolver:
    """
    Turns directives into TtlPolicy objects and registers them.

    Indirect TTL expressions (``${cache.<name>}``) are looked up as
    ``cache.<name>.ttl`` / ``cache.<name>.timeUnit`` and fall back to
    ``cache.default.ttl`` / ``cache.default.timeUnit`` when absent. A value
    that is present but unparsable is an error, never defaulted.
    """

    def __init__(self, config: ConfigSource, registry: TtlRegistry) -> None:
        self._config = config
        self._registry = registry
        self._declared: set[type] = set()
        self._lock = threading.Lock()

    @property
    def config(self) -> ConfigSource:
        return self._config

    def resolve(self, directive: Directive) -> TtlPolicy:
        ttl = directive.ttl
        if is_literal_ttl(ttl):
            return TtlPolicy(int(ttl), TimeUnit.coerce(directive.time_unit), directive.cache_type)

        match = TTL_EXPRESSION.fullmatch(str(ttl))
        if match is None:
            raise MalformedExpression(f"Invalid format for ttl expression {ttl!r} of cache {directive.cache_name}")

        base = match.group(1)
        return TtlPolicy(self.resolve_ttl(base), self.resolve_time_unit(base), directive.cache_type)

    def _with_default(self, base: str, name: str) -> tuple[str, str] | None:
        key = f"{base}.{name}"
        value = self._config.get_property(key)
        if value is not None:
            return key, value

        logger.warning(f"There is no {key} property")
        default_key = f"{DEFAULT_BASE}.{name}"
        value = self._config.get_property(default_key)
        if value is None:
            return None
        return default_key, value

    def resolve_ttl(self, base: str) -> int:
        found = self._with_default(base, TTL)
        if found is None:
            raise MissingTtlConfiguration(f"There is no {base}.{TTL} property and no {DEFAULT_BASE}.{TTL} property")
        key, value = found
        return parse_ttl(value, key)

    def resolve_time_unit(self, base: str) -> TimeUnit:
        found = self._with_default(base, TIME_UNIT)
        if found is None:
            raise MissingTimeUnitConfiguration(
                f"There is no {base}.{TIME_UNIT} property and no {DEFAULT_BASE}.{TIME_UNIT} property"
            )
        return TimeUnit.parse(found[1].strip())

    def resolve_cache_type(self, base: str) -> CacheType:
        value = self._config.get_property(f"{base}.{CACHE_TYPE}")
        if value is None:
            value = self._config.get_property(f"{DEFAULT_BASE}.{CACHE_TYPE}")
        if value is None:
            return CacheType.REDIS
        return CacheType.parse(value)

    def _register(self, directive: Directive) -> TtlPolicy:
        policy = self.resolve(directive)
        self._registry.upsert(directive.cache_name, policy)
        logger.debug(
            f"Added cache configuration for cache: {directive.cache_name}, TTL: {policy.ttl}, "
            f"TimeUnit: {policy.time_unit}, CacheType: {policy.cache_type}"
        )
        return policy

    def declare(self, directive: Directive) -> TtlPolicy | None:
        try:
            return self._register(directive)
        except ResolutionError as e:
            logger.error(f"Could not resolve TTL for cache {directive.cache_name}: {e}")
            return None

    def declare_all(self, directives: Iterable[Directive]) -> dict[str, ResolutionError]:
        failures: dict[str, ResolutionError] = {}
        for directive in directives:
            try:
                self._register(directive)
            except ResolutionError as e:
                logger.error(f"Could not resolve TTL for cache {directive.cache_name}: {e}")
                failures[directive.cache_name] = e
        return failures

    def declare_for(self, owner: type, directives: Iterable[Directive]) -> dict[str, ResolutionError]:
        """
        Declare the directives of ``owner`` on its first call only.
        Names already in the registry keep their current policy, so a later
        instance never undoes a refresh.
        """
        with self._lock:
            if owner in self._declared:
                return {}
            self._declared.add(owner)
        return self.declare_all(directive for directive in directives if directive.cache_name not in self._registry)
