"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from storefront.services.money import line_total, sum_money, to_decimal


class HydrationState(str, Enum):
    """Whether the store has loaded the persisted snapshot yet."""
    UNHYDRATED = "unhydrated"  # Provisional empty view
    HYDRATED = "hydrated"


@dataclass(frozen=True)
class CartLineItem:
    """Single line in the cart. Name, price and image are captured at add-time."""
    id: str
    name: str
    price: Decimal
    image: Optional[str] = None
    quantity: int = 1

    def __post_init__(self):
        # Normalize numeric fields
        object.__setattr__(self, "price", to_decimal(self.price))

    @property
    def line_total(self) -> Decimal:
        """Unrounded price for all units of this line."""
        return line_total(self.price, self.quantity)

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary for the persisted snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class CartState:
    """
    Ordered, id-unique collection of line items.

    `total` and `item_count` are derived on every read and never stored.
    """
    items: Tuple[CartLineItem, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def total(self) -> Decimal:
        """Σ price × quantity, recomputed from the items."""
        return sum_money(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        """Total number of units in the cart (not distinct lines)."""
        return sum(item.quantity for item in self.items)

    def find(self, item_id: str) -> Optional[CartLineItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def to_dict(self) -> dict:
        """Persisted shape: items only, total is always derived."""
        return {"items": [item.to_dict() for item in self.items]}


EMPTY_CART = CartState()


@dataclass(frozen=True)
class CartView:
    """Read-only snapshot handed to UI collaborators and subscribers."""
    items: Tuple[CartLineItem, ...]
    total: Decimal
    item_count: int
    hydrated: bool

    @classmethod
    def of(cls, state: CartState, hydrated: bool) -> "CartView":
        return cls(
            items=state.items,
            total=state.total,
            item_count=state.item_count,
            hydrated=hydrated,
        )

    @property
    def is_empty(self) -> bool:
        return not self.items
