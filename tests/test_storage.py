"""Tests for the durable key-value store adapters"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from freshcart.db import StoreKeys
from freshcart.errors import PersistenceError
from freshcart.services.storage import MemoryStore, RedisStore, WriteResult


@pytest.mark.asyncio
async def test_redis_store_round_trip(redis_store, mock_redis_client):
    """Test write then read through RedisStore"""
    result = await redis_store.write("cartItems", "[]")

    assert result == WriteResult(key="cartItems", ok=True)
    assert await redis_store.read("cartItems") == "[]"
    mock_redis_client.set.assert_awaited_with("cartItems", "[]")


@pytest.mark.asyncio
async def test_redis_store_missing_key(redis_store):
    """Test reading an absent key returns None"""
    assert await redis_store.read("products") is None


@pytest.mark.asyncio
async def test_redis_store_decodes_bytes():
    """Test byte payloads are decoded to text"""
    client = MagicMock()
    client.get = AsyncMock(return_value=b"[1]")

    assert await RedisStore(client=client).read("products") == "[1]"


@pytest.mark.asyncio
async def test_redis_store_read_failure_raises(broken_redis_client):
    """Test read errors become PersistenceError"""
    store = RedisStore(client=broken_redis_client)

    with pytest.raises(PersistenceError) as exc_info:
        await store.read("products")

    assert exc_info.value.key == "products"


@pytest.mark.asyncio
async def test_redis_store_write_failure_is_reported(broken_redis_client):
    """Test write errors are returned, not raised"""
    store = RedisStore(client=broken_redis_client)

    result = await store.write("products", "[]")
    deleted = await store.delete("products")

    assert result.ok is False
    assert "ConnectionError" in result.error
    assert deleted.ok is False


@pytest.mark.asyncio
async def test_redis_store_unconfigured():
    """Test missing credentials surface as PersistenceError on read"""
    store = RedisStore()

    with pytest.raises(PersistenceError):
        await store.read("products")

    result = await store.write("products", "[]")
    assert result.ok is False


@pytest.mark.asyncio
async def test_redis_store_namespace(mock_redis_client):
    """Test namespaced keys"""
    store = RedisStore(client=mock_redis_client, namespace="shop-a")

    await store.write("cartItems", "[]")

    assert "shop-a:cartItems" in mock_redis_client.data
    assert await store.read("cartItems") == "[]"


def test_store_keys():
    """Test snapshot key names"""
    assert StoreKeys.PRODUCTS == "products"
    assert StoreKeys.CART_ITEMS == "cartItems"
    assert StoreKeys.namespaced("products", "x") == "x:products"


@pytest.mark.asyncio
async def test_memory_store():
    """Test in-memory store semantics"""
    store = MemoryStore({"products": "[]"})

    assert await store.read("products") == "[]"
    assert (await store.write("cartItems", "[1]")).ok
    assert (await store.delete("products")).ok
    assert await store.read("products") is None
    assert store.data == {"cartItems": "[1]"}
