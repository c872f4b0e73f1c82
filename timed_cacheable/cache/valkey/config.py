from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from glide import GlideClientConfiguration, NodeAddress


@dataclass
class ValkeyClientConfig:
    """
    Connection settings for the Valkey store.
    Includes only essential settings; others use glide defaults.
    """

    host: str = "localhost"
    port: int = 6379
    database_id: int = 0
    use_tls: bool = False
    request_timeout_ms: int | None = None
    client_name: str | None = "timed-cacheable"
    additional_nodes: list[tuple[str, int]] = field(default_factory=list)

    def to_glide_config(self) -> GlideClientConfiguration:
        addresses = [NodeAddress(host=self.host, port=self.port)]
        for host, port in self.additional_nodes:
            addresses.append(NodeAddress(host=host, port=port))

        config = GlideClientConfiguration(
            addresses=addresses,
            use_tls=self.use_tls,
            database_id=self.database_id,
        )
        if self.request_timeout_ms is not None:
            config.request_timeout = self.request_timeout_ms
        if self.client_name is not None:
            config.client_name = self.client_name
        return config

    @classmethod
    def localhost(cls, port: int = 6379, database_id: int = 0) -> "ValkeyClientConfig":
        return cls(host="localhost", port=port, database_id=database_id)

    @classmethod
    def from_section(cls, section: Mapping[str, Any] | None) -> "ValkeyClientConfig":
        """Build from a ``valkey`` configuration section (host, port, db, tls, timeout)."""
        section = section or {}
        timeout = section.get("timeout")
        return cls(
            host=str(section.get("host", "localhost")),
            port=int(section.get("port", 6379)),
            database_id=int(section.get("db", 0)),
            use_tls=str(section.get("tls", "false")).lower() == "true",
            request_timeout_ms=int(timeout) if timeout is not None else None,
        )
