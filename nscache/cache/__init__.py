"""
Namespaced Redis cache.

Stores raw strings with a mandatory expiry under optionally namespaced keys
("<namespace>:<key>"). Misses and failures surface as typed errors:
- InvalidExpiry: value offered without a positive lifetime
- SetError / GetError: Redis failed the command
- KeyNotFound: key absent or expired
"""
from nscache.cache.errors import (
    CacheError,
    GetError,
    InvalidExpiry,
    KeyNotFound,
    SetError,
)
from nscache.cache.redis_client import (
    NAMESPACE_SEPARATOR,
    RedisStore,
    close_store,
    get_store,
    parse_address,
)
from nscache.cache.store import Expiry, Store

__all__ = [
    "CacheError",
    "GetError",
    "InvalidExpiry",
    "KeyNotFound",
    "SetError",
    "NAMESPACE_SEPARATOR",
    "RedisStore",
    "close_store",
    "get_store",
    "parse_address",
    "Expiry",
    "Store",
]
