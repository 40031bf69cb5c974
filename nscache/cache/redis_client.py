"""
Namespaced Redis store.

Thin wrapper over redis.asyncio that does three things and nothing else:
- prefixes every key with an optional namespace ("<namespace>:<key>")
- refuses to store a value without an expiry
- turns driver failures into the typed errors of nscache.cache.errors

Pooling, cluster routing, retries and TLS are all left to the driver.
No error is logged or retried here; callers decide what a miss or a
failure means for them.
"""
import math
from datetime import timedelta
from ssl import TLSVersion
from typing import Any, Optional, Tuple

from redis.asyncio import Redis
from redis.asyncio.cluster import RedisCluster

from nscache.cache.errors import GetError, InvalidExpiry, KeyNotFound, SetError
from nscache.cache.store import Expiry
from nscache.config.settings import RedisConfig, get_redis_config
from nscache.utils.logger import logger

# Redis has no official namespace delimiter, but ":" is the convention.
NAMESPACE_SEPARATOR = ":"
DEFAULT_PORT = 6379
MIN_TLS_VERSION = TLSVersion.TLSv1_2
_MILLISECOND = timedelta(milliseconds=1)


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split "host:port" into its parts.

    The port defaults to 6379. IPv6 hosts must be bracketed ("[::1]:6379").

    Raises:
        ValueError: empty host or non-numeric port
    """
    if address.startswith("["):
        end = address.find("]")
        if end == -1:
            raise ValueError(f"invalid redis address: {address!r}")
        host, rest = address[1:end], address[end + 1:]
        if rest and not rest.startswith(":"):
            raise ValueError(f"invalid redis address: {address!r}")
        port = rest[1:]
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            host, port = address, ""

    if not host:
        raise ValueError(f"invalid redis address: {address!r}")
    if not port:
        return host, DEFAULT_PORT
    if not port.isdigit():
        raise ValueError(f"invalid port in redis address: {address!r}")
    return host, int(port)


def _expiry_args(expiry: Expiry) -> dict:
    """SET arguments for an expiry: EX for whole seconds, PX otherwise."""
    if isinstance(expiry, timedelta):
        if expiry <= timedelta(0):
            raise InvalidExpiry()
        ms = expiry // _MILLISECOND
    else:
        seconds = float(expiry)
        if not math.isfinite(seconds) or seconds <= 0:
            raise InvalidExpiry()
        ms = round(seconds * 1000)

    # Sub-millisecond lifetimes round up to the smallest one Redis accepts
    ms = max(1, ms)
    if ms % 1000 == 0:
        return {"ex": ms // 1000}
    return {"px": ms}


class RedisStore:
    """
    Redis implementation of the Store contract.

    Usage:
        store = RedisStore.from_config(get_redis_config())

        await store.set("user:42", "payload", timedelta(hours=1))
        value = await store.get("user:42")

    Any client exposing async ``set(key, value, ex=/px=)`` and ``get(key)``
    can be wrapped directly, which is how the tests drive it:

        store = RedisStore(fake_client, namespace="example")
    """

    def __init__(self, client: Any, namespace: str = ""):
        self._client = client
        self._namespace = namespace

    @classmethod
    def connect(
        cls,
        address: str,
        password: str = "",
        namespace: str = "",
        cluster_mode: bool = False,
        tls: bool = False,
    ) -> "RedisStore":
        """
        Build a store with its own driver client.

        No connection is opened here; the driver connects on first use.

        Args:
            address: "host:port" of the server, or of any seed node in cluster mode
            password: AUTH password, empty for none
            namespace: key prefix, empty for none
            cluster_mode: use a Redis Cluster client instead of a single node
            tls: require TLS 1.2+; ignored unless cluster_mode is set
        """
        host, port = parse_address(address)

        if cluster_mode:
            cluster_kwargs: dict = {}
            if tls:
                cluster_kwargs.update(ssl=True, ssl_min_version=MIN_TLS_VERSION)

            client = RedisCluster(
                host=host,
                port=port,
                password=password or None,
                decode_responses=True,  # Return strings, not bytes
                **cluster_kwargs,
            )
        else:
            client = Redis(
                host=host,
                port=port,
                password=password or None,
                db=0,
                decode_responses=True,
            )

        logger.info(
            f"Redis store created for {host}:{port} "
            f"(cluster={cluster_mode}, tls={cluster_mode and tls}, "
            f"namespace={namespace or '-'})"
        )
        return cls(client, namespace)

    @classmethod
    def from_config(cls, config: RedisConfig) -> "RedisStore":
        """Build a store from configuration. Cluster mode and TLS are on unless disabled."""
        return cls.connect(
            config.address,
            config.password,
            namespace=config.namespace,
            cluster_mode=not config.disable_cluster_mode,
            tls=not config.disable_tls,
        )

    @property
    def client(self) -> Any:
        """The wrapped driver client."""
        return self._client

    @property
    def namespace(self) -> str:
        return self._namespace

    def namespace_key(self, key: str) -> str:
        """Prefix the key with the namespace, or return it unchanged when there is none."""
        if self._namespace:
            return f"{self._namespace}{NAMESPACE_SEPARATOR}{key}"
        return key

    async def set(self, key: str, value: str, expiry: Expiry) -> None:
        """
        Store a value under the key for the given lifetime.

        Args:
            key: Cache key, namespaced before it reaches Redis
            value: Raw string value
            expiry: timedelta or seconds, must be greater than zero

        Raises:
            InvalidExpiry: expiry is zero (or negative); Redis is not called
            SetError: Redis failed the SET
        """
        expiry_args = _expiry_args(expiry)
        key = self.namespace_key(key)

        try:
            await self._client.set(key, value, **expiry_args)
        except Exception as e:
            raise SetError(key, e) from e

    async def get(self, key: str) -> str:
        """
        Fetch the value stored under the key.

        Raises:
            KeyNotFound: the key never existed or has expired
            GetError: Redis failed the GET
        """
        key = self.namespace_key(key)

        try:
            value = await self._client.get(key)
        except Exception as e:
            raise GetError(key, e) from e

        if value is None:
            raise KeyNotFound(key)
        return value

    async def close(self) -> None:
        """Release the driver's connection pool."""
        await self._client.aclose()
        logger.info("Redis store closed")

    async def __aenter__(self) -> "RedisStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


# ─────────────────────────────────────────────────────────────────────
# Process-wide instance and FastAPI-style dependency
# ─────────────────────────────────────────────────────────────────────

_store: Optional[RedisStore] = None


def get_store() -> RedisStore:
    """
    Shared store built from REDIS_* configuration.

    Usage in endpoints:
        @router.get("/profile/{user_id}")
        async def profile(user_id: str, store: RedisStore = Depends(get_store)):
            try:
                return {"profile": await store.get(f"profile:{user_id}")}
            except KeyNotFound:
                ...
    """
    global _store

    if _store is None:
        _store = RedisStore.from_config(get_redis_config())

    return _store


async def close_store() -> None:
    """Close the shared store on app shutdown."""
    global _store

    if _store is not None:
        await _store.close()
        _store = None
