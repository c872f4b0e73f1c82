from .cache import CacheInterface
from .config import ConfigSource
from .interceptor import CacheInterceptorInterface

__all__ = ["CacheInterface", "CacheInterceptorInterface", "ConfigSource"]
