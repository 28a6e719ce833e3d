# storefront/domain/schemas.py
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Annotated, Iterable, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal inside the domain, plain number in JSON
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Standard (half-up) rounding to cents, never truncation."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# DOMAIN
# =====================================================
class Product(CamelModel):
    id: str
    name: str
    description: str
    price: Money = Field(..., ge=0)
    category: str
    image: str
    stock: int = Field(..., ge=0)
    featured: bool = False


class CartItem(CamelModel):
    product: Product
    quantity: int = Field(..., ge=1)


class Cart(CamelModel):
    id: str
    user_id: str | None = None
    items: List[CartItem] = Field(default_factory=list)
    total: Money = Decimal("0.00")

    def find_item(self, product_id: str) -> CartItem | None:
        return next((i for i in self.items if i.product.id == product_id), None)

    def recalculate(self) -> Decimal:
        self.total = calculate_total(self.items)
        return self.total


def calculate_total(items: Iterable[CartItem]) -> Decimal:
    return round_money(sum((i.product.price * i.quantity for i in items), Decimal("0.00")))


class User(CamelModel):
    """Sanitized user, safe to hand to callers."""

    id: str
    email: str
    name: str
    created_at: datetime


class UserRecord(User):
    password_hash: str

    def sanitized(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password_hash"}))


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class ShippingAddress(CamelModel):
    full_name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    phone: str


class Order(CamelModel):
    id: str
    user_id: str
    items: List[CartItem]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: ShippingAddress
    created_at: datetime
    updated_at: datetime


# =====================================================
# API IN
# =====================================================
class AddItemIn(CamelModel):
    cart_id: str | None = None
    product_id: str = Field(..., min_length=1)
    quantity: int = 1
    user_id: str | None = None


class UpdateItemIn(CamelModel):
    cart_id: str = Field(..., min_length=1)
    product_id: str = Field(..., min_length=1)
    quantity: int


class CreateOrderIn(CamelModel):
    user_id: str = Field(..., min_length=1)
    cart_id: str = Field(..., min_length=1)
    shipping_address: ShippingAddress


class UpdateStatusIn(CamelModel):
    status: OrderStatus


class RegisterIn(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)
    name: str = Field(..., min_length=1, max_length=100)


class LoginIn(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
