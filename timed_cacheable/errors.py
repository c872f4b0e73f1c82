class TimedCacheError(Exception):
    """Base class for every error raised by timed_cacheable."""


class ResolutionError(TimedCacheError, ValueError):
    """A directive or configuration entry could not be turned into a TtlPolicy."""


class MalformedExpression(ResolutionError):
    pass


class InvalidTtlValue(ResolutionError):
    pass


class InvalidTimeUnit(ResolutionError):
    pass


class InvalidCacheType(ResolutionError):
    pass


class MissingTtlConfiguration(ResolutionError):
    pass


class MissingTimeUnitConfiguration(ResolutionError):
    pass


class InvalidPolicy(TimedCacheError, ValueError):
    pass


class UnsupportedBackingStoreKind(TimedCacheError):
    pass


class StoreError(TimedCacheError):
    pass


class StoreUnavailable(StoreError, ConnectionError):
    pass


class StoreOperationFailed(StoreError):
    pass
