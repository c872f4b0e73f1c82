import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from .constants import CACHE_PREFIX, DEFAULT_CACHE_NAME
from .errors import ResolutionError
from .interfaces.config import ConfigSource
from .models.ttl_policy import TtlPolicy
from .registry import TtlRegistry
from .resolver import DirectiveResolver

logger = logging.getLogger(__name__)


class RefreshCoordinator:
    """
    Re-derives TTL policies from the ``cache`` configuration section.

    Every mapping-shaped entry except ``default`` becomes a policy. Entries that
    fail to resolve are logged and left untouched in the registry; the others
    are merged in one pass.
    """

    def __init__(self, config: ConfigSource, registry: TtlRegistry) -> None:
        self._config = config
        self._registry = registry
        self._resolver = DirectiveResolver(config, registry)

    def _build(self, name: str) -> TtlPolicy:
        base = f"{CACHE_PREFIX}.{name}"
        return TtlPolicy(
            self._resolver.resolve_ttl(base),
            self._resolver.resolve_time_unit(base),
            self._resolver.resolve_cache_type(base),
        )

    def refresh(self) -> dict[str, ResolutionError]:
        section: Mapping[str, Any] = self._config.get_section(CACHE_PREFIX) or {}
        policies: dict[str, TtlPolicy] = {}
        failures: dict[str, ResolutionError] = {}

        for name, entry in section.items():
            if name.lower() == DEFAULT_CACHE_NAME:
                continue
            if not isinstance(entry, Mapping):
                logger.debug(f"Skipping non-map cache configuration entry {name}")
                continue
            try:
                policies[name] = self._build(name)
            except ResolutionError as e:
                logger.error(f"Could not refresh TTL for cache {name}: {e}")
                failures[name] = e

        self._registry.bulk_merge(policies)
        logger.debug(f"Refreshed TTL policies for {len(policies)} caches, {len(failures)} failed")
        return failures

    def on_refresh(self, event: Any = None) -> dict[str, ResolutionError]:
        return self.refresh()

    async def watch(self, signal: asyncio.Event) -> None:
        while True:
            await signal.wait()
            signal.clear()
            try:
                self.refresh()
            except Exception as e:
                logger.error(f"TTL refresh failed: {e}", exc_info=True)
