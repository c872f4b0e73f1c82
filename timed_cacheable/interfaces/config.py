from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class ConfigSource(ABC):
    @abstractmethod
    def get_property(self, key: str) -> str | None:
        """Return the value at a dotted key as a string, or None when absent."""

    @abstractmethod
    def get_section(self, key: str) -> Mapping[str, Any] | None:
        """Return the structured value at a dotted key, or None when absent or not a mapping."""
