"""Cart package: models, transitions, persistence, and store facade."""
from .models import CartLineItem, CartState, CartView, HydrationState
from .persistence import CartPersistence, DebouncedWriter, ImmediateWriter
from .service import CartStore, open_cart_store

__all__ = [
    "CartLineItem",
    "CartState",
    "CartView",
    "HydrationState",
    "CartPersistence",
    "DebouncedWriter",
    "ImmediateWriter",
    "CartStore",
    "open_cart_store",
]
