from .cache_item import CacheItem
from .directive import Directive
from .ttl_policy import CacheType, TimeUnit, TtlPolicy

__all__ = ["CacheItem", "CacheType", "Directive", "TimeUnit", "TtlPolicy"]
