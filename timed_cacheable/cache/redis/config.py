from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from redis.asyncio import Redis
from redis.asyncio.cluster import ClusterNode, RedisCluster


@dataclass
class RedisClientConfig:
    """
    Connection settings for the Redis store.
    A non-empty ``cluster_nodes`` list switches to a RedisCluster client.
    """

    host: str = "localhost"
    port: int = 6379
    username: str | None = None
    password: str | None = None
    db: int = 0
    socket_timeout: float = 0.5
    socket_connect_timeout: float = 0.5
    cluster_nodes: list[tuple[str, int]] = field(default_factory=list)

    def create_client(self) -> Any:
        if self.cluster_nodes:
            return RedisCluster(
                startup_nodes=[ClusterNode(host, port) for host, port in self.cluster_nodes],
                username=self.username,
                password=self.password,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_connect_timeout,
            )
        return Redis(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            db=self.db,
            socket_timeout=self.socket_timeout,
            socket_connect_timeout=self.socket_connect_timeout,
        )

    @classmethod
    def localhost(cls, port: int = 6379, db: int = 0) -> "RedisClientConfig":
        return cls(host="localhost", port=port, db=db)

    @classmethod
    def from_section(cls, section: Mapping[str, Any] | None) -> "RedisClientConfig":
        """
        Build from a ``redis`` configuration section:
        host, port, username, password, db, timeout (seconds) and
        cluster.nodes ("host:port,host:port").
        """
        section = section or {}
        timeout = float(section.get("timeout", 0.5))
        nodes = (section.get("cluster") or {}).get("nodes")
        if nodes:
            config = cls.cluster(str(nodes), password=section.get("password"))
        else:
            config = cls(host=str(section.get("host", "localhost")), port=int(section.get("port", 6379)))
            config.password = section.get("password")
        config.username = section.get("username")
        config.db = int(section.get("db", 0))
        config.socket_timeout = timeout
        config.socket_connect_timeout = timeout
        return config

    @classmethod
    def cluster(cls, nodes: str | list[tuple[str, int]], password: str | None = None) -> "RedisClientConfig":
        """Build a cluster config from ``[(host, port), ...]`` or a ``"host:port,host:port"`` string."""
        if isinstance(nodes, str):
            parsed = []
            for node in nodes.split(","):
                host, _, port = node.strip().rpartition(":")
                parsed.append((host, int(port)))
            nodes = parsed
        if not nodes:
            raise ValueError("At least one node must be provided for cluster configuration")
        primary_host, primary_port = nodes[0]
        return cls(host=primary_host, port=primary_port, password=password, cluster_nodes=list(nodes))
