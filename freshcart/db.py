"""
Database Module - Upstash Redis client

Provides the async Upstash Redis client backing the durable key-value store
for the catalog and cart snapshots, plus the key names they live under.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from freshcart.errors import ERROR_STORE_NOT_CONFIGURED


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Optional prefix so several shops can share one Redis database
FRESHCART_NAMESPACE = os.environ.get("FRESHCART_NAMESPACE", "")


_redis_client: Optional[AsyncRedis] = None


def redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Raises:
        ValueError: If the credentials are not set
    """
    global _redis_client

    if _redis_client is None:
        if not redis_configured():
            raise ValueError(ERROR_STORE_NOT_CONFIGURED)
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class StoreKeys:
    """Keys of the two snapshots kept in the durable store."""

    PRODUCTS = "products"
    CART_ITEMS = "cartItems"

    @staticmethod
    def namespaced(key: str, namespace: str = "") -> str:
        namespace = namespace or FRESHCART_NAMESPACE
        return f"{namespace}:{key}" if namespace else key
