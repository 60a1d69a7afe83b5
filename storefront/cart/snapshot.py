"""
Persisted cart snapshot: JSON payload `{"items": [...], "version": 1}`.

Only items are stored; the total is recomputed after loading. Unknown
fields (in the envelope or in an item) are ignored so newer writers do not
break older readers.
"""
import json
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storefront.errors import (
    ERROR_SNAPSHOT_DUPLICATE_ID,
    ERROR_SNAPSHOT_NOT_JSON,
    ERROR_SNAPSHOT_SHAPE,
    SnapshotDecodeError,
)
from storefront.services.money import parse_decimal

from .models import CartLineItem, CartState

SNAPSHOT_VERSION = 1


class SnapshotItem(BaseModel):
    """One stored line item."""
    id: str
    name: str = ""
    price: Decimal = Field(ge=0)
    image: Optional[str] = None
    quantity: int = Field(ge=1, strict=True)

    # Tolerate fields added by newer versions
    model_config = ConfigDict(extra="ignore")

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_decimal(v)


class CartSnapshot(BaseModel):
    """Stored envelope."""
    items: List[SnapshotItem] = []
    version: int = SNAPSHOT_VERSION

    model_config = ConfigDict(extra="ignore")

    @field_validator("items")
    @classmethod
    def ids_are_unique(cls, items):
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValueError(ERROR_SNAPSHOT_DUPLICATE_ID)
        return items


def encode(state: CartState) -> str:
    """Serialize the items of a state to snapshot JSON."""
    payload = state.to_dict()
    payload["version"] = SNAPSHOT_VERSION
    return json.dumps(payload)


def decode(raw: str | bytes) -> CartState:
    """
    Parse snapshot JSON into a CartState, items loaded verbatim.

    Raises:
        SnapshotDecodeError: Invalid encoding, invalid or too deeply nested JSON, invalid shape
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, RecursionError) as e:
        raise SnapshotDecodeError(f"{ERROR_SNAPSHOT_NOT_JSON}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotDecodeError(f"{ERROR_SNAPSHOT_SHAPE}: top level is {type(data).__name__}")

    try:
        snapshot = CartSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotDecodeError(f"{ERROR_SNAPSHOT_SHAPE}: {e.error_count()} error(s)") from e

    return CartState(tuple(
        CartLineItem(
            id=item.id,
            name=item.name,
            price=item.price,
            image=item.image,
            quantity=item.quantity,
        )
        for item in snapshot.items
    ))
