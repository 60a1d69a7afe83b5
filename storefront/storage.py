"""
Storage Module - Durable Snapshot Backends

Provides the durable medium the cart snapshot is written to:
- MemoryStorage: process-local dict (tests, previews)
- FileStorage: one JSON file per key in a local directory
- RedisStorage: Upstash Redis over REST, keys expire after TTL.CART

The backend is chosen by CART_STORAGE_BACKEND; get_storage() returns a
singleton built from the environment.
"""

import os
from pathlib import Path
from typing import Optional, Protocol

from storefront.errors import (
    ERROR_REDIS_CONFIG,
    ERROR_STORAGE_BACKEND,
    ERROR_STORAGE_READ,
    ERROR_STORAGE_WRITE,
    StorageError,
)
from storefront.logging import get_logger

logger = get_logger(__name__)


# Environment variables
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "memory")
CART_STORAGE_DIR = os.environ.get("CART_STORAGE_DIR", ".cart")
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart-storage")
CART_WRITE_DEBOUNCE_MS = int(os.environ.get("CART_WRITE_DEBOUNCE_MS", "100"))

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


class StorageKeys:
    """Key namespace for persisted cart data."""

    CART = CART_STORAGE_KEY  # one snapshot per client session

    @staticmethod
    def cart_key(namespace: Optional[str] = None) -> str:
        return namespace or StorageKeys.CART


class TTL:
    """Time-to-live constants (in seconds)."""

    CART = 2592000  # 30 days


class SnapshotStorage(Protocol):
    """Minimal key/value contract the cart persistence adapter needs."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage. Survives store instances, not the process."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """
    Local file storage: each key maps to `<directory>/<key>.json`.

    Writes go to a temp file first and are renamed into place, so a reader
    never sees a half-written snapshot.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"{ERROR_STORAGE_READ}: {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"{ERROR_STORAGE_WRITE}: {path}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"{ERROR_STORAGE_WRITE}: {e}") from e


class RedisStorage:
    """Upstash Redis storage; every write refreshes the key's TTL."""

    def __init__(self, client, ttl: int = TTL.CART):
        self.client = client
        self.ttl = ttl

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value, ex=self.ttl)

    def delete(self, key: str) -> None:
        self.client.delete(key)


# Singleton instances
_redis_client = None
_storage: Optional[SnapshotStorage] = None


def get_redis_sync():
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError(ERROR_REDIS_CONFIG)

        from upstash_redis import Redis
        _redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


def create_storage(backend: Optional[str] = None) -> SnapshotStorage:
    """
    Build a storage backend by name.

    Args:
        backend: "memory", "file" or "redis" (default: CART_STORAGE_BACKEND)

    Raises:
        ValueError: Unknown backend name or missing Redis configuration
    """
    name = (backend or CART_STORAGE_BACKEND).lower()

    if name == "memory":
        return MemoryStorage()
    if name == "file":
        return FileStorage(CART_STORAGE_DIR)
    if name == "redis":
        return RedisStorage(get_redis_sync())

    raise ValueError(f"{ERROR_STORAGE_BACKEND}: {name}")


def get_storage() -> SnapshotStorage:
    """Get the configured storage backend (singleton)."""
    global _storage

    if _storage is None:
        _storage = create_storage()
        logger.info(f"Cart storage backend: {type(_storage).__name__}")

    return _storage
