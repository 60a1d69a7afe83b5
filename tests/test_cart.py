"""
Tests for cart models and pure transitions
"""

import pytest
from decimal import Decimal
from storefront.cart import CartLineItem, CartState
from storefront.cart import transitions


class TestCartLineItem:
    """Tests for CartLineItem dataclass."""

    def test_create_line_item(self):
        """Test creating a line item."""
        item = CartLineItem(id="prod-123", name="Air Max", price=129.99, quantity=2)

        assert item.id == "prod-123"
        assert item.quantity == 2
        assert item.image is None
        assert item.price == Decimal("129.99")

    def test_line_total_is_unrounded(self):
        """Test line total keeps full precision."""
        item = CartLineItem(id="p", name="Test", price=Decimal("0.333"), quantity=3)

        assert item.line_total == Decimal("0.999")

    def test_to_dict(self):
        """Test serialization to dict."""
        item = CartLineItem(id="prod-123", name="Test", price=100, image="/a.jpg", quantity=1)

        data = item.to_dict()
        assert data == {
            "id": "prod-123",
            "name": "Test",
            "price": "100",
            "image": "/a.jpg",
            "quantity": 1,
        }

    def test_with_quantity_returns_copy(self):
        item = CartLineItem(id="p", name="Test", price=5)
        bumped = item.with_quantity(4)

        assert bumped.quantity == 4
        assert item.quantity == 1


class TestCartState:
    """Tests for CartState dataclass."""

    def test_create_empty_cart(self):
        """Test creating an empty cart."""
        state = CartState()

        assert state.items == ()
        assert state.item_count == 0
        assert state.total == 0

    def test_cart_with_items(self):
        """Test totals over multiple items."""
        state = CartState((
            CartLineItem(id="prod-1", name="Product 1", price=100, quantity=2),
            CartLineItem(id="prod-2", name="Product 2", price=200, quantity=1),
        ))

        assert state.item_count == 3
        assert state.total == Decimal("400")

    def test_total_has_no_float_drift(self):
        state = CartState((
            CartLineItem(id="a", name="A", price=0.1, quantity=1),
            CartLineItem(id="b", name="B", price=0.2, quantity=1),
        ))

        assert state.total == Decimal("0.3")

    def test_to_dict_excludes_total(self):
        state = CartState((CartLineItem(id="a", name="A", price=5, quantity=2),))

        assert set(state.to_dict()) == {"items"}


class TestAddItem:
    """Tests for the add transition."""

    def test_add_new_item(self):
        state = transitions.add_item(CartState(), {"id": "a", "name": "A", "price": 5})

        assert len(state.items) == 1
        assert state.items[0].quantity == 1
        assert state.total == Decimal("5")

    def test_add_existing_keeps_first_snapshot(self):
        """Second add only increments; price and name from the first add win."""
        state = transitions.add_item(CartState(), {"id": "x", "name": "First", "price": 10})
        state = transitions.add_item(state, {"id": "x", "name": "Second", "price": 99, "image": "/b.jpg"})

        assert len(state.items) == 1
        item = state.items[0]
        assert item.name == "First"
        assert item.price == Decimal("10")
        assert item.image is None
        assert item.quantity == 2
        assert state.total == Decimal("20")

    def test_add_preserves_insertion_order(self):
        state = CartState()
        for item_id in ["c", "a", "b", "a"]:
            state = transitions.add_item(state, {"id": item_id, "price": 1})

        assert [item.id for item in state.items] == ["c", "a", "b"]

    def test_add_line_item_candidate_resets_quantity(self):
        candidate = CartLineItem(id="a", name="A", price=5, quantity=7)
        state = transitions.add_item(CartState(), candidate)

        assert state.items[0].quantity == 1

    def test_add_without_name(self):
        state = transitions.add_item(CartState(), {"id": "x", "price": 10})

        assert state.items[0].name == ""

    def test_ids_stay_unique(self):
        """Any sequence of adds yields unique ids."""
        state = CartState()
        sequence = ["a", "b", "a", "c", "b", "b", "a", "d", "c"]
        for item_id in sequence:
            state = transitions.add_item(state, {"id": item_id, "price": 2})

        ids = [item.id for item in state.items]
        assert len(ids) == len(set(ids))
        assert state.item_count == len(sequence)


class TestRemoveAndUpdate:
    """Tests for remove/update/clear transitions."""

    @pytest.fixture
    def two_items(self):
        state = transitions.add_item(CartState(), {"id": "a", "price": 5})
        return transitions.add_item(state, {"id": "b", "price": 7})

    def test_remove_existing(self, two_items):
        state = transitions.remove_item(two_items, "a")

        assert [item.id for item in state.items] == ["b"]

    def test_remove_missing_is_noop(self, two_items):
        assert transitions.remove_item(two_items, "zzz") == two_items
        assert transitions.remove_item(CartState(), "nonexistent").items == ()

    def test_update_sets_absolute_quantity(self, two_items):
        state = transitions.update_quantity(two_items, "a", 5)

        assert state.find("a").quantity == 5
        assert state.total == Decimal("32")

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_update_non_positive_removes(self, two_items, quantity):
        state = transitions.update_quantity(two_items, "a", quantity)

        assert state.find("a") is None
        assert [(item.id, item.quantity, item.price) for item in state.items] == [("b", 1, Decimal("7"))]
        assert state.total == Decimal("7")

    def test_update_missing_is_noop(self, two_items):
        assert transitions.update_quantity(two_items, "zzz", 3) == two_items

    @pytest.mark.parametrize("quantity", [0.5, 0.99, -0.5])
    def test_update_fraction_below_one_removes(self, two_items, quantity):
        state = transitions.update_quantity(two_items, "a", quantity)

        assert state.find("a") is None
        assert all(item.quantity >= 1 for item in state.items)

    def test_update_fraction_truncates(self, two_items):
        state = transitions.update_quantity(two_items, "a", 2.7)

        assert state.find("a").quantity == 2

    def test_clear(self, two_items):
        state = transitions.clear_cart(two_items)

        assert state.items == ()
        assert state.total == 0

    def test_transitions_do_not_mutate_input(self, two_items):
        before = two_items.to_dict()
        transitions.update_quantity(two_items, "a", 9)
        transitions.remove_item(two_items, "b")
        transitions.add_item(two_items, {"id": "a", "price": 1})

        assert two_items.to_dict() == before
