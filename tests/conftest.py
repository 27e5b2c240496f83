"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock, MagicMock

# Keep tests off any real Redis or mirror endpoint
os.environ["UPSTASH_REDIS_REST_URL"] = ""
os.environ["UPSTASH_REDIS_REST_TOKEN"] = ""
os.environ["CART_MIRROR_URL"] = ""
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from freshcart.services.mirror import CartMirror
from freshcart.services.models import Product
from freshcart.services.storage import MemoryStore, RedisStore


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store"""
    return MemoryStore()


@pytest.fixture
def mock_redis_client():
    """Mock Upstash async Redis client backed by a dict"""
    data = {}
    client = MagicMock()

    async def _get(key):
        return data.get(key)

    async def _set(key, value, **kwargs):
        data[key] = value
        return "OK"

    async def _delete(*keys):
        removed = 0
        for key in keys:
            removed += 1 if data.pop(key, None) is not None else 0
        return removed

    client.get = AsyncMock(side_effect=_get)
    client.set = AsyncMock(side_effect=_set)
    client.delete = AsyncMock(side_effect=_delete)
    client.data = data
    return client


@pytest.fixture
def redis_store(mock_redis_client):
    """RedisStore over the mock client"""
    return RedisStore(client=mock_redis_client)


@pytest.fixture
def broken_redis_client():
    """Redis client whose every call fails"""
    client = MagicMock()
    client.get = AsyncMock(side_effect=ConnectionError("redis down"))
    client.set = AsyncMock(side_effect=ConnectionError("redis down"))
    client.delete = AsyncMock(side_effect=ConnectionError("redis down"))
    return client


@pytest.fixture
def tomatoes():
    """Seed product id=1"""
    return Product(id="1", name="Tomatoes", price=40, category="vegetables", image="assets/vegetables.png")


@pytest.fixture
def apples():
    """Seed product id=4"""
    return Product(id="4", name="Apples", price=100, category="fruits", image="assets/fruits.png")


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient that accepts every POST"""
    response = Mock()
    response.raise_for_status = Mock()
    client = MagicMock()
    client.post = AsyncMock(return_value=response)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def mirror(mock_http_client):
    """Enabled cart mirror with a single attempt per call"""
    return CartMirror(url="https://mirror.test/api/cart", attempts=1, client=mock_http_client)
