import logging
import threading
from collections.abc import Iterator, Mapping

from .constants import DEFAULT_CACHE_NAME
from .models.ttl_policy import TtlPolicy

logger = logging.getLogger(__name__)


class PolicyRef:
    """
    Live holder of the policy registered for one cache name.

    The policy itself is immutable; updates swap the whole object under the
    holder's lock, so ttl, time_unit and cache_type always change together.
    Anyone holding the ref observes later updates.
    """

    __slots__ = ("name", "_policy", "_lock")

    def __init__(self, name: str, policy: TtlPolicy) -> None:
        self.name = name
        self._policy = policy
        self._lock = threading.Lock()

    @property
    def policy(self) -> TtlPolicy:
        with self._lock:
            return self._policy

    def update(self, policy: TtlPolicy) -> None:
        with self._lock:
            self._policy = policy

    def __repr__(self) -> str:
        return f"PolicyRef({self.name!r}, {self._policy!r})"


class TtlRegistry:
    """Mapping of cache name to TtlPolicy, safe for concurrent readers and writers."""

    def __init__(self) -> None:
        self._refs: dict[str, PolicyRef] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> TtlPolicy | None:
        ref = self._refs.get(name)
        if ref is None:
            return None
        return ref.policy

    def ref(self, name: str) -> PolicyRef | None:
        return self._refs.get(name)

    def upsert(self, name: str, policy: TtlPolicy) -> PolicyRef:
        ref = self._refs.get(name)
        if ref is not None:
            ref.update(policy)
            logger.debug(f"Updated TTL policy for cache {name}: {policy}")
            return ref
        with self._lock:
            ref = self._refs.get(name)
            if ref is None:
                ref = PolicyRef(name, policy)
                self._refs[name] = ref
            else:
                ref.update(policy)
        logger.debug(f"Registered TTL policy for cache {name}: {policy}")
        return ref

    def bulk_merge(self, policies: Mapping[str, TtlPolicy]) -> None:
        """Existing names are updated through their PolicyRef; new names are inserted."""
        for name, policy in policies.items():
            if name.lower() == DEFAULT_CACHE_NAME:
                continue
            if not isinstance(policy, TtlPolicy):
                logger.warning(f"Skipping malformed policy for cache {name}: {policy!r}")
                continue
            self.upsert(name, policy)

    def remove(self, name: str) -> TtlPolicy | None:
        with self._lock:
            ref = self._refs.pop(name, None)
        return ref.policy if ref is not None else None

    def names(self) -> list[str]:
        return list(self._refs)

    def snapshot(self) -> dict[str, TtlPolicy]:
        return {name: ref.policy for name, ref in list(self._refs.items())}

    def __contains__(self, name: object) -> bool:
        return name in self._refs

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
