from dataclasses import dataclass

from .ttl_policy import CacheType, TimeUnit


@dataclass(frozen=True)
class Directive:
    """
    Caching declaration for one call site.

    ``ttl`` is either a literal amount (an int or a digit string) or an
    indirection such as ``"${cache.getPost}"`` resolved against configuration.
    Only the first cache name is used for TTL resolution; ``sync``,
    ``condition`` and ``unless`` are carried as metadata and never interpreted
    by the interceptor.
    """

    cache_names: tuple[str, ...]
    ttl: str | int
    key: str = ""
    time_unit: TimeUnit | str | None = None
    cache_type: CacheType = CacheType.REDIS
    sync: bool = False
    condition: str = ""
    unless: str = ""

    def __post_init__(self) -> None:
        names = self.cache_names
        if isinstance(names, str):
            names = (names,)
        names = tuple(names)
        if not names or not all(names):
            raise ValueError("At least one non-empty cache name must be provided")
        object.__setattr__(self, "cache_names", names)
        object.__setattr__(self, "cache_type", CacheType.parse(self.cache_type))

    @property
    def cache_name(self) -> str:
        return self.cache_names[0]
