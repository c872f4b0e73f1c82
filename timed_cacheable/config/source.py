import logging
from collections.abc import Mapping
from typing import Any

from dependency_injector import providers

from ..interfaces.config import ConfigSource

logger = logging.getLogger(__name__)


def expand_properties(properties: Mapping[str, Any]) -> dict[str, Any]:
    """
    Turn flat dotted keys into a nested dict.

    {"cache.getPost.ttl": "90", "cache.getPost.timeUnit": "s"}
        -> {"cache": {"getPost": {"ttl": "90", "timeUnit": "s"}}}
    """
    tree: dict[str, Any] = {}
    for dotted_key, value in properties.items():
        *parents, leaf = dotted_key.split(".")
        node = tree
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        if isinstance(value, Mapping):
            value = expand_properties(value)
        node[leaf] = value
    return tree


class PropertySource(ConfigSource):
    """
    Read-only view over a dependency-injector Configuration provider.

    The provider can be loaded any way dependency-injector supports (dict,
    env, yaml, ini); lookups walk the current configuration tree, so a
    refresh only needs to reload the provider.
    """

    def __init__(self, configuration: providers.Configuration | None = None) -> None:
        self._configuration = configuration if configuration is not None else providers.Configuration()

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "PropertySource":
        source = cls()
        source.replace(options)
        return source

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "PropertySource":
        return cls.from_dict(expand_properties(properties))

    @property
    def configuration(self) -> providers.Configuration:
        return self._configuration

    def replace(self, options: Mapping[str, Any]) -> None:
        self._configuration.reset_override()
        self._configuration.from_dict(dict(options))
        logger.debug("Configuration replaced")

    def _lookup(self, key: str) -> Any:
        node: Any = self._configuration() or {}
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
            if node is None:
                return None
        return node

    def get_property(self, key: str) -> str | None:
        value = self._lookup(key)
        if value is None or isinstance(value, Mapping):
            return None
        return str(value)

    def get_section(self, key: str) -> Mapping[str, Any] | None:
        value = self._lookup(key)
        if isinstance(value, Mapping):
            return value
        return None
