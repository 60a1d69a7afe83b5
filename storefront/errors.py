"""
Common Error Constants and Exceptions

Centralized error messages to avoid string duplication. None of these ever
reach a cart caller: the persistence adapter catches and logs them.
"""

# Snapshot errors
ERROR_SNAPSHOT_NOT_JSON = "Snapshot is not valid JSON"
ERROR_SNAPSHOT_SHAPE = "Snapshot payload has an invalid shape"
ERROR_SNAPSHOT_DUPLICATE_ID = "Snapshot contains duplicate item ids"

# Storage errors
ERROR_STORAGE_READ = "Cart storage read failed"
ERROR_STORAGE_WRITE = "Cart storage write failed"
ERROR_STORAGE_BACKEND = "Unknown cart storage backend"
ERROR_REDIS_CONFIG = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"


class SnapshotDecodeError(ValueError):
    """Persisted cart payload could not be decoded."""


class StorageError(RuntimeError):
    """Durable storage backend failed to read or write."""
