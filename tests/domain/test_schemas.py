"""Tests for money rounding and wire format of the domain models."""

from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.schemas import (
    Cart,
    CartItem,
    Product,
    UserRecord,
    calculate_total,
    round_money,
)


def _product(price, stock=10):
    return Product(
        id="p", name="P", description="", price=Decimal(price), category="C", image="", stock=stock
    )


class TestMoney:
    def test_round_half_up(self):
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")

    def test_calculate_total(self):
        items = [
            CartItem(product=_product("10.00"), quantity=2),
            CartItem(product=_product("5.50"), quantity=1),
        ]
        assert calculate_total(items) == Decimal("25.50")

    def test_calculate_total_of_nothing(self):
        assert calculate_total([]) == Decimal("0.00")


class TestWireFormat:
    def test_camel_case_aliases_and_numeric_money(self):
        cart = Cart(id="c1", user_id="u1", items=[CartItem(product=_product("1.10"), quantity=3)])
        cart.recalculate()
        data = cart.model_dump(mode="json", by_alias=True)
        assert data["userId"] == "u1"
        assert data["total"] == 3.3
        assert data["items"][0]["product"]["price"] == 1.1

    def test_accepts_camel_case_input(self):
        cart = Cart.model_validate({"id": "c1", "userId": "u1"})
        assert cart.user_id == "u1"

    def test_sanitized_user_drops_hash(self):
        record = UserRecord(
            id="u1",
            email="a@x.com",
            name="A",
            password_hash="$2b$hash",
            created_at=datetime.now(timezone.utc),
        )
        data = record.sanitized().model_dump()
        assert "password_hash" not in data
        assert data["email"] == "a@x.com"
