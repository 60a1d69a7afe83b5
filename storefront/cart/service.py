"""Cart store: owns the cart state, applies mutations, hydrates from storage."""
from decimal import Decimal
from typing import Callable, List, Optional

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.storage import CART_WRITE_DEBOUNCE_MS, SnapshotStorage, get_storage

from . import transitions
from .models import EMPTY_CART, CartState, CartView, HydrationState
from .persistence import CartPersistence, DebouncedWriter, ImmediateWriter
from .transitions import Candidate

logger = get_logger(__name__)

Listener = Callable[[CartView], None]


class CartStore:
    """
    Single-session shopping cart.

    Features:
    - Mutations apply synchronously and are serialized in call order
    - Every mutation schedules a write of the full item list
    - One-way UNHYDRATED -> HYDRATED transition; reads before it see an empty cart
    - Subscribers are notified with a fresh CartView after every change

    Usage:
        store = CartStore(CartPersistence(storage))
        store.hydrate()
        store.add_item({"id": "shoe-1", "name": "Air Max", "price": 129.99})
        store.get_total()
    """

    def __init__(self, persistence: CartPersistence, writer=None):
        self.persistence = persistence
        self.writer = writer or ImmediateWriter(persistence)
        self._state: CartState = EMPTY_CART
        self._hydration = HydrationState.UNHYDRATED
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------

    @property
    def hydration_state(self) -> HydrationState:
        return self._hydration

    @property
    def is_hydrated(self) -> bool:
        return self._hydration is HydrationState.HYDRATED

    def hydrate(self) -> CartView:
        """
        Load the persisted snapshot, once.

        Missing or corrupted snapshots hydrate as an empty cart. Later calls
        return the current view without touching storage.
        """
        if self.is_hydrated:
            return self.get_state()

        self._state = self.persistence.load()
        self._hydration = HydrationState.HYDRATED
        logger.info(
            f"Cart hydrated from {self.persistence.key}: "
            f"{len(self._state.items)} line(s), {self._state.item_count} unit(s)"
        )
        self._notify()
        return self.get_state()

    def _ensure_hydrated(self) -> None:
        # A mutation before hydration would overwrite the stored cart
        if not self.is_hydrated:
            self.hydrate()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _visible_state(self) -> CartState:
        return self._state if self.is_hydrated else EMPTY_CART

    def get_state(self) -> CartView:
        """Read-only view of items and total (empty until hydrated)."""
        return CartView.of(self._visible_state(), hydrated=self.is_hydrated)

    @property
    def items(self):
        return self._visible_state().items

    def get_total(self) -> Decimal:
        return self._visible_state().total

    def get_item_count(self) -> int:
        """Sum of quantities across all lines."""
        return self._visible_state().item_count

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_item(self, candidate: Candidate) -> CartView:
        """Add one unit; an existing line keeps its add-time name/price/image."""
        self._ensure_hydrated()
        new_state = transitions.add_item(self._state, candidate)
        logger.debug(f"Cart add {sanitize_id_for_logging(transitions.candidate_id(candidate))}")
        return self._commit(new_state)

    def remove_item(self, item_id: str) -> CartView:
        """Remove a line; unknown ids are a no-op."""
        self._ensure_hydrated()
        logger.debug(f"Cart remove {sanitize_id_for_logging(item_id)}")
        return self._commit(transitions.remove_item(self._state, item_id))

    def update_quantity(self, item_id: str, new_quantity: int) -> CartView:
        """Set a line's absolute quantity; ≤ 0 removes it, unknown ids are a no-op."""
        self._ensure_hydrated()
        logger.debug(f"Cart set {sanitize_id_for_logging(item_id)} quantity={new_quantity}")
        return self._commit(transitions.update_quantity(self._state, item_id, new_quantity))

    def clear_cart(self) -> CartView:
        self._ensure_hydrated()
        logger.debug("Cart cleared")
        return self._commit(transitions.clear_cart(self._state))

    def _commit(self, new_state: CartState) -> CartView:
        self._state = new_state
        self._notify()
        self.writer.schedule(new_state)
        return self.get_state()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new view after every change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        view = self.get_state()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception as e:
                logger.error(f"Cart listener {listener!r} failed: {e}", exc_info=True)

    def flush(self) -> None:
        """Force any pending snapshot write."""
        self.writer.flush()


def open_cart_store(
    storage: Optional[SnapshotStorage] = None,
    key: Optional[str] = None,
    debounce_ms: int = CART_WRITE_DEBOUNCE_MS,
    hydrate: bool = True,
) -> CartStore:
    """
    Session construction point: wire storage, writer and store.

    Args:
        storage: Backend to use (default: configured singleton)
        key: Snapshot namespace (default: CART_STORAGE_KEY)
        debounce_ms: Write coalescing delay, 0 for synchronous writes
        hydrate: Load the stored snapshot before returning
    """
    persistence = CartPersistence(storage if storage is not None else get_storage(), key)
    writer = DebouncedWriter(persistence, debounce_ms) if debounce_ms > 0 else ImmediateWriter(persistence)
    store = CartStore(persistence, writer)
    if hydrate:
        store.hydrate()
    return store
