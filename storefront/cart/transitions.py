"""
Pure cart state transitions.

Each function takes the current CartState and returns a new one; nothing
here touches storage, logging or subscribers. The store applies these and
handles the side effects.
"""
from typing import Any, Mapping, Union

from .models import EMPTY_CART, CartLineItem, CartState

Candidate = Union[CartLineItem, Mapping[str, Any]]


def to_line_item(candidate: Candidate) -> CartLineItem:
    """Build a fresh quantity-1 line from an add-to-cart candidate."""
    if isinstance(candidate, CartLineItem):
        return candidate.with_quantity(1)
    return CartLineItem(
        id=candidate["id"],
        name=candidate.get("name", ""),
        price=candidate.get("price"),
        image=candidate.get("image"),
        quantity=1,
    )


def candidate_id(candidate: Candidate) -> str:
    if isinstance(candidate, CartLineItem):
        return candidate.id
    return candidate["id"]


def add_item(state: CartState, candidate: Candidate) -> CartState:
    """
    Add one unit of a product.

    An id already in the cart gains one unit and keeps its add-time
    name/price/image; a new id is appended with quantity 1.
    """
    item_id = candidate_id(candidate)

    if state.find(item_id) is None:
        return CartState(state.items + (to_line_item(candidate),))

    return CartState(tuple(
        item.with_quantity(item.quantity + 1) if item.id == item_id else item
        for item in state.items
    ))


def remove_item(state: CartState, item_id: str) -> CartState:
    """Drop the line with this id; unknown ids leave the state as is."""
    if state.find(item_id) is None:
        return state
    return CartState(tuple(item for item in state.items if item.id != item_id))


def update_quantity(state: CartState, item_id: str, new_quantity: int) -> CartState:
    """Set an absolute quantity; anything that truncates to ≤ 0 removes the line."""
    quantity = int(new_quantity)
    if quantity <= 0:
        return remove_item(state, item_id)

    if state.find(item_id) is None:
        return state

    return CartState(tuple(
        item.with_quantity(quantity) if item.id == item_id else item
        for item in state.items
    ))


def clear_cart(state: CartState) -> CartState:
    return EMPTY_CART
