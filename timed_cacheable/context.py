from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Name of the method currently going through the interceptor, used to
# correlate cache-hit log lines. Each task/thread sees its own value.
_current_method: ContextVar[str | None] = ContextVar("timed_cacheable_current_method", default=None)


def current_method() -> str | None:
    return _current_method.get()


def clear_current_method() -> None:
    _current_method.set(None)


@contextmanager
def invocation_scope(method_name: str) -> Iterator[None]:
    token = _current_method.set(method_name)
    try:
        yield
    finally:
        _current_method.reset(token)
