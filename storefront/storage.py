"""
Key-value storage backends for persisted client state.

The cart store only needs ``get(key)`` and ``set(key, value)`` on string
values. Two backends are provided:
- MemoryStorage: page-local dict, the equivalent of browser local storage
- RedisStorage: Upstash Redis (sync client) for state that outlives the process
"""

from typing import Dict, Optional, Protocol

from upstash_redis import Redis

from storefront.config import UPSTASH_REDIS_REST_TOKEN, UPSTASH_REDIS_REST_URL
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Durable string key-value slot."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """In-process storage; contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._data


class RedisStorage:
    """
    Upstash Redis backed storage.

    Usage:
        storage = RedisStorage(namespace="session:abc:")
        storage.set("cart", "[]")
    """

    def __init__(self, client: Optional[Redis] = None, namespace: str = ""):
        self._client = client
        self.namespace = namespace

    @property
    def client(self) -> Redis:
        """Get Redis client (lazy initialization)."""
        if self._client is None:
            self._client = get_redis_sync()
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value)


_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)
        logger.info("Upstash Redis client initialized")

    return _sync_redis_client
