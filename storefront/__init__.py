"""
Storefront Core Module

This package contains the client-side cart engine:
- cart: cart store, pure transitions, snapshot codec, persistence adapter
- storage: durable snapshot backends (memory, file, Upstash Redis)
- services.money: Decimal money helpers
- logging: centralized logging

Note: Imports are lazy so that importing `storefront.logging` alone does not
pull in the storage backends.
"""

__all__ = [
    "CartStore",
    "open_cart_store",
    "get_storage",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    if name == "open_cart_store":
        from storefront.cart import open_cart_store
        return open_cart_store
    if name == "get_storage":
        from storefront.storage import get_storage
        return get_storage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
