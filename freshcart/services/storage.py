"""
Durable key-value store port and adapters.

Every snapshot is written whole (full replace). Reads raise PersistenceError
when the backend cannot be reached; writes never raise and report their
outcome as a WriteResult that the caller logs.
"""
from dataclasses import dataclass
from typing import Optional, Protocol

from freshcart.db import StoreKeys, get_redis
from freshcart.errors import PersistenceError
from freshcart.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a durable write."""
    key: str
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls, key: str) -> "WriteResult":
        return cls(key=key, ok=True)

    @classmethod
    def failure(cls, key: str, error: Exception) -> "WriteResult":
        return cls(key=key, ok=False, error=f"{type(error).__name__}: {error}")


class KeyValueStore(Protocol):
    """Storage port used by the catalog and cart services."""

    async def read(self, key: str) -> Optional[str]:
        """Return the stored snapshot or None. Raises PersistenceError."""
        ...

    async def write(self, key: str, payload: str) -> WriteResult:
        """Replace the snapshot under key. Never raises."""
        ...

    async def delete(self, key: str) -> WriteResult:
        """Drop the snapshot under key. Never raises."""
        ...


class RedisStore:
    """
    KeyValueStore backed by Upstash Redis.

    The client is resolved lazily so that a missing configuration surfaces as
    a PersistenceError on first use instead of at construction.

    Usage:
        store = RedisStore()
        raw = await store.read("products")
        result = await store.write("cartItems", "[]")
    """

    def __init__(self, client=None, namespace: str = ""):
        self._redis = client
        self.namespace = namespace

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                raise PersistenceError(f"Redis not available: {e}")
        return self._redis

    def _key(self, key: str) -> str:
        return StoreKeys.namespaced(key, self.namespace)

    async def read(self, key: str) -> Optional[str]:
        try:
            data = await self.redis.get(self._key(key))
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to read from Redis: {e}", key=key) from e

        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return str(data)

    async def write(self, key: str, payload: str) -> WriteResult:
        try:
            await self.redis.set(self._key(key), payload)
            return WriteResult.success(key)
        except Exception as e:
            return WriteResult.failure(key, e)

    async def delete(self, key: str) -> WriteResult:
        try:
            await self.redis.delete(self._key(key))
            return WriteResult.success(key)
        except Exception as e:
            return WriteResult.failure(key, e)


class MemoryStore:
    """Process-local KeyValueStore. Used for offline sessions and tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, payload: str) -> WriteResult:
        self.data[key] = payload
        return WriteResult.success(key)

    async def delete(self, key: str) -> WriteResult:
        self.data.pop(key, None)
        return WriteResult.success(key)


def log_write_result(result: WriteResult, what: str) -> WriteResult:
    """Log a failed write; the in-memory state stays as it is."""
    if not result.ok:
        logger.error(f"Failed to persist {what} (key={result.key}): {result.error}")
    else:
        logger.debug(f"Persisted {what} (key={result.key})")
    return result
