"""
Cart persistence adapter: reads the snapshot for hydration and writes it
back after mutations.

Nothing in here raises to the caller. A missing or unreadable snapshot
hydrates as an empty cart; a failed write is logged and the in-memory cart
is left as it is.
"""
import asyncio
from typing import Optional

from storefront.errors import (
    ERROR_STORAGE_READ,
    ERROR_STORAGE_WRITE,
    SnapshotDecodeError,
)
from storefront.logging import get_logger
from storefront.storage import CART_WRITE_DEBOUNCE_MS, SnapshotStorage, StorageKeys

from . import snapshot
from .models import EMPTY_CART, CartState

logger = get_logger(__name__)


class CartPersistence:
    """Snapshot read/write against one storage key."""

    def __init__(self, storage: SnapshotStorage, key: Optional[str] = None):
        self.storage = storage
        self.key = StorageKeys.cart_key(key)

    def load(self) -> CartState:
        """Read the stored snapshot; any failure degrades to the empty cart."""
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"{ERROR_STORAGE_READ} for key {self.key}: {e}")
            return EMPTY_CART

        if not raw:
            return EMPTY_CART

        try:
            return snapshot.decode(raw)
        except SnapshotDecodeError as e:
            logger.warning(f"Discarding corrupted cart snapshot {self.key}: {e}")
            return EMPTY_CART

    def save(self, state: CartState) -> bool:
        """
        Write the snapshot now.

        Returns:
            True if written, False if the backend failed (already logged)
        """
        try:
            self.storage.set(self.key, snapshot.encode(state))
            return True
        except Exception as e:
            logger.error(f"{ERROR_STORAGE_WRITE} for key {self.key}: {e}")
            return False


class ImmediateWriter:
    """Writes every scheduled snapshot synchronously."""

    def __init__(self, persistence: CartPersistence):
        self.persistence = persistence

    @property
    def pending(self) -> bool:
        return False

    def schedule(self, state: CartState) -> None:
        self.persistence.save(state)

    def flush(self) -> None:
        pass


class DebouncedWriter:
    """
    Coalesces writes on the running event loop.

    Each schedule() replaces the pending state and restarts the delay, so a
    burst of mutations produces one write of the last state. Outside a
    running loop the write happens immediately.
    """

    def __init__(self, persistence: CartPersistence, delay_ms: int = CART_WRITE_DEBOUNCE_MS):
        self.persistence = persistence
        self.delay = max(delay_ms, 0) / 1000
        self._pending: Optional[CartState] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, state: CartState) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None or self.delay == 0:
            self._cancel()
            self._pending = None
            self.persistence.save(state)
            return

        self._pending = state
        self._cancel()
        self._handle = loop.call_later(self.delay, self.flush)

    def flush(self) -> None:
        """Write the pending snapshot, if any, right away."""
        self._cancel()
        state, self._pending = self._pending, None
        if state is not None:
            self.persistence.save(state)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
