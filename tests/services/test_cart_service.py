"""Tests for cart creation, line items, stock policy and totals."""

from decimal import Decimal

import pytest

from storefront.domain.errors import (
    CartItemNotFoundError,
    CartNotFoundError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.schemas import calculate_total


def assert_total_consistent(cart):
    assert cart.total == calculate_total(cart.items)


class TestCartCreation:
    def test_create_cart(self, cart_service):
        cart = cart_service.create_cart()
        assert cart.id
        assert cart.items == []
        assert cart.total == Decimal("0")

    def test_create_cart_with_explicit_id_and_user(self, cart_service):
        cart = cart_service.create_cart(user_id="u1", cart_id="cart-1")
        assert cart.id == "cart-1"
        assert cart_service.get_cart("cart-1").user_id == "u1"

    def test_get_missing_cart_returns_none(self, cart_service):
        assert cart_service.get_cart("missing") is None

    def test_get_or_create_reuses_requested_id(self, cart_service):
        cart = cart_service.get_or_create_cart("fresh")
        assert cart.id == "fresh"
        assert cart_service.get_or_create_cart("fresh").id == "fresh"

    def test_get_or_create_returns_existing_cart(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart = cart_service.get_or_create_cart("c1")
        assert cart.items[0].quantity == 2


class TestAddItem:
    def test_add_creates_missing_cart(self, cart_service):
        cart = cart_service.add_item("c1", "a")
        assert cart.id == "c1"
        assert cart.items[0].quantity == 1
        assert cart_service.get_cart("c1") is not None

    def test_add_without_cart_id_generates_one(self, cart_service):
        cart = cart_service.add_item(None, "a", user_id="u1")
        assert cart.id
        assert cart.user_id == "u1"

    def test_add_existing_product_increments_quantity(self, cart_service):
        cart_service.add_item("c1", "a", 1)
        cart = cart_service.add_item("c1", "a", 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.total == Decimal("30.00")

    def test_items_keep_insertion_order(self, cart_service):
        cart_service.add_item("c1", "b")
        cart = cart_service.add_item("c1", "a")
        assert [i.product.id for i in cart.items] == ["b", "a"]

    def test_total_example(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart = cart_service.add_item("c1", "b", 1)
        assert cart.total == Decimal("25.50")
        assert_total_consistent(cart)

    def test_adding_beyond_stock_fails(self, cart_service):
        cart_service.add_item("c1", "b", 1)
        with pytest.raises(InsufficientStockError) as exc:
            cart_service.add_item("c1", "b", 1)
        assert exc.value.product_id == "b"
        assert exc.value.requested == 2
        assert exc.value.available == 1
        assert cart_service.get_cart("c1").items[0].quantity == 1

    def test_adding_exactly_the_stock_succeeds(self, cart_service):
        cart = cart_service.add_item("c1", "a", 5)
        assert cart.items[0].quantity == 5

    def test_adding_more_than_stock_at_once_fails(self, cart_service):
        with pytest.raises(InsufficientStockError):
            cart_service.add_item("c1", "a", 6)

    def test_unknown_product(self, cart_service):
        with pytest.raises(ProductNotFoundError):
            cart_service.add_item("c1", "nope")

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, cart_service, quantity):
        with pytest.raises(ValidationError):
            cart_service.add_item("c1", "a", quantity)

    def test_total_rounds_half_up(self, cart_service, storage):
        product = storage.products.get("a")
        product.price = Decimal("0.125")
        storage.products.put(product)
        cart = cart_service.add_item("c1", "a", 1)
        assert cart.total == Decimal("0.13")


class TestUpdateQuantity:
    def test_update_replaces_quantity(self, cart_service):
        cart_service.add_item("c1", "a", 3)
        cart = cart_service.update_quantity("c1", "a", 1)
        assert cart.items[0].quantity == 1
        assert cart.total == Decimal("10.00")

    def test_update_to_exact_stock(self, cart_service):
        cart_service.add_item("c1", "a", 1)
        cart = cart_service.update_quantity("c1", "a", 5)
        assert cart.items[0].quantity == 5

    def test_update_beyond_stock_fails(self, cart_service):
        cart_service.add_item("c1", "a", 1)
        with pytest.raises(InsufficientStockError):
            cart_service.update_quantity("c1", "a", 6)
        assert cart_service.get_cart("c1").items[0].quantity == 1

    def test_update_to_zero_removes_item(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart_service.add_item("c1", "b", 1)
        cart = cart_service.update_quantity("c1", "a", 0)
        assert [i.product.id for i in cart.items] == ["b"]
        assert cart.total == Decimal("5.50")

    def test_update_missing_cart(self, cart_service):
        with pytest.raises(CartNotFoundError):
            cart_service.update_quantity("missing", "a", 1)

    def test_update_item_not_in_cart(self, cart_service):
        cart_service.add_item("c1", "a", 1)
        with pytest.raises(CartItemNotFoundError):
            cart_service.update_quantity("c1", "b", 1)


class TestRemoveAndClear:
    def test_remove_item(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart_service.add_item("c1", "b", 1)
        cart = cart_service.remove_item("c1", "b")
        assert [i.product.id for i in cart.items] == ["a"]
        assert cart.total == Decimal("20.00")

    def test_remove_absent_item_is_noop(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart = cart_service.remove_item("c1", "b")
        assert len(cart.items) == 1
        assert_total_consistent(cart)

    def test_remove_from_missing_cart(self, cart_service):
        with pytest.raises(CartNotFoundError):
            cart_service.remove_item("missing", "a")

    def test_clear_keeps_id(self, cart_service):
        cart_service.add_item("c1", "a", 2)
        cart = cart_service.clear("c1")
        assert cart.id == "c1"
        assert cart.items == []
        assert cart.total == Decimal("0")

    def test_clear_missing_cart(self, cart_service):
        with pytest.raises(CartNotFoundError):
            cart_service.clear("missing")

    def test_returned_cart_does_not_alias_stored_cart(self, cart_service):
        cart = cart_service.add_item("c1", "a", 1)
        cart.items.clear()
        assert len(cart_service.get_cart("c1").items) == 1
