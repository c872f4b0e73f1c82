DEFAULT_CACHE_NAME = "default"
CACHE_PREFIX = "cache"
TTL = "ttl"
TIME_UNIT = "timeUnit"
CACHE_TYPE = "cacheType"

# Store keys are namespaced as "<cache_name>::<key>".
KEY_SEPARATOR = "::"
