"""
Adapters for the UI controls that drive the cart: add-to-bag buttons,
quick-add buttons on product cards and the +/- quantity stepper.
"""
from decimal import Decimal
from typing import Optional, Union

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import parse_price

from .service import CartStore

logger = get_logger(__name__)


def add_to_cart(
    store: CartStore,
    product_id: str,
    product_name: str,
    price: Union[str, int, float, Decimal],
    image: Optional[str] = None,
    disabled: bool = False,
) -> bool:
    """
    Add one unit of a product from a button press.

    Quick-add cards pass display prices like "$129.99"; they are parsed
    before reaching the store.

    Returns:
        True if the item was added, False for a disabled control or an
        unparseable price
    """
    if disabled:
        return False

    try:
        numeric_price = parse_price(price)
    except ValueError as e:
        logger.warning(f"Add to cart skipped for {sanitize_id_for_logging(product_id)}: {e}")
        return False

    store.add_item({
        "id": product_id,
        "name": product_name,
        "price": numeric_price,
        "image": image,
    })
    return True


def _current_quantity(store: CartStore, item_id: str) -> Optional[int]:
    item = next((item for item in store.items if item.id == item_id), None)
    return item.quantity if item else None


def increment(store: CartStore, item_id: str) -> None:
    """Stepper "+": one more unit of a line already in the cart."""
    quantity = _current_quantity(store, item_id)
    if quantity is not None:
        store.update_quantity(item_id, quantity + 1)


def decrement(store: CartStore, item_id: str) -> None:
    """Stepper "-": one unit fewer; the line disappears when it reaches zero."""
    quantity = _current_quantity(store, item_id)
    if quantity is not None:
        store.update_quantity(item_id, quantity - 1)
