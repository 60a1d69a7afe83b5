"""
Cart page presentation: turns a CartView into display strings.

All rounding happens here; the store keeps unrounded Decimals.
"""
from dataclasses import dataclass
from typing import Tuple

from storefront.services.money import format_money

from .models import CartLineItem, CartView

FALLBACK_IMAGE = "/shoes/shoe-1.jpg"
SHIPPING_LABEL = "Free"
FREE_SHIPPING_NOTE = "Free shipping on orders over $50"


def item_count_label(count: int) -> str:
    """Pluralized count, e.g. "1 item" or "3 items"."""
    return f"{count} {'item' if count == 1 else 'items'}"


@dataclass(frozen=True)
class CartLineSummary:
    id: str
    name: str
    image: str
    quantity: int
    unit_price: str
    line_total: str

    @classmethod
    def of(cls, item: CartLineItem, currency: str = "USD") -> "CartLineSummary":
        return cls(
            id=item.id,
            name=item.name,
            image=item.image or FALLBACK_IMAGE,
            quantity=item.quantity,
            unit_price=format_money(item.price, currency),
            line_total=format_money(item.line_total, currency),
        )


@dataclass(frozen=True)
class CartSummary:
    is_empty: bool
    item_count: int
    item_count_label: str
    lines: Tuple[CartLineSummary, ...]
    subtotal: str
    shipping: str
    total: str
    checkout_enabled: bool
    shipping_note: str = FREE_SHIPPING_NOTE


def build_cart_summary(view: CartView, currency: str = "USD") -> CartSummary:
    """Order summary for the cart page. Shipping is always free, so total == subtotal."""
    subtotal = format_money(view.total, currency)
    return CartSummary(
        is_empty=view.is_empty,
        item_count=view.item_count,
        item_count_label=item_count_label(view.item_count),
        lines=tuple(CartLineSummary.of(item, currency) for item in view.items),
        subtotal=subtotal,
        shipping=SHIPPING_LABEL,
        total=subtotal,
        checkout_enabled=not view.is_empty,
    )
