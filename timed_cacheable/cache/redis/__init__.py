from .cache import RedisCache
from .config import RedisClientConfig

__all__ = ["RedisCache", "RedisClientConfig"]
