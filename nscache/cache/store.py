from datetime import timedelta
from typing import Protocol, Union, runtime_checkable

# A lifetime as a timedelta or a number of seconds
Expiry = Union[timedelta, int, float]


@runtime_checkable
class Store(Protocol):
    """
    Minimal string cache contract.

    Implementations must raise the errors from nscache.cache.errors:
    InvalidExpiry for a non-positive expiry, SetError / GetError for backend
    failures and KeyNotFound for a miss.
    """

    async def set(self, key: str, value: str, expiry: Expiry) -> None:
        ...

    async def get(self, key: str) -> str:
        ...
