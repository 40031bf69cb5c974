"""
Cache error types.

Every failure raised by a Store derives from CacheError so callers can
catch the whole family at once, or branch on the specific kind:

    try:
        value = await store.get("session:42")
    except KeyNotFound:
        value = await rebuild_session()   # a miss, not a failure
    except GetError:
        raise                             # Redis itself is unhappy
"""
from typing import Optional


class CacheError(Exception):
    """Base class for all cache errors."""


class InvalidExpiry(CacheError):
    """Raised when a value is stored without a positive expiry."""

    def __init__(self) -> None:
        super().__init__("invalid parameter expiry: must be non-zero")


class KeyNotFound(CacheError):
    """Raised when a key is absent, either never set or already expired."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"cache value was not found with key: {key}")


class _BackendError(CacheError):
    operation = ""

    def __init__(self, key: str, cause: Optional[BaseException]) -> None:
        self.key = key
        self.cause = cause
        super().__init__(
            f'an internal error occurred: could not {self.operation} value '
            f'under key "{key}": {cause}'
        )


class SetError(_BackendError):
    """Raised when Redis fails a SET. Carries the namespaced key and cause."""

    operation = "set"


class GetError(_BackendError):
    """Raised when Redis fails a GET for any reason other than a miss."""

    operation = "get"
