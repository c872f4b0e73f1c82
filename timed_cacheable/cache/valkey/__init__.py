from .cache import ValkeyCache
from .config import ValkeyClientConfig

__all__ = ["ValkeyCache", "ValkeyClientConfig"]
