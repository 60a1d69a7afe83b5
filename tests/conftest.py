"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables before storefront modules read them
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("CART_STORAGE_KEY", "cart-storage")
os.environ.setdefault("CART_WRITE_DEBOUNCE_MS", "100")

from storefront.cart import CartPersistence, CartStore  # noqa: E402
from storefront.storage import MemoryStorage  # noqa: E402


class FailingStorage:
    """Storage whose every call raises, like a full or unavailable backend."""

    def __init__(self, error: Exception = None):
        self.error = error or OSError("quota exceeded")

    def get(self, key):
        raise self.error

    def set(self, key, value):
        raise self.error

    def delete(self, key):
        raise self.error


@pytest.fixture
def memory_storage():
    """Fresh in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def persistence(memory_storage):
    """Persistence adapter over memory storage"""
    return CartPersistence(memory_storage)


@pytest.fixture
def store(persistence):
    """Hydrated store with synchronous writes"""
    cart_store = CartStore(persistence)
    cart_store.hydrate()
    return cart_store


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def mock_redis_client():
    """Mock Upstash Redis client"""
    client = Mock()
    client.get.return_value = None
    client.set.return_value = True
    client.delete.return_value = 1
    return client


@pytest.fixture
def sample_product():
    """Sample product candidate"""
    return {
        "id": "nike-air-max-90",
        "name": "Nike Air Max 90",
        "price": 129.99,
        "image": "/shoes/shoe-2.webp",
    }
