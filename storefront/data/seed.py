# storefront/data/seed.py
from decimal import Decimal

from storefront.domain.schemas import Product
from storefront.repos import Storage
from storefront.services.auth_service import AuthService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"
DEMO_NAME = "Demo User"

PRODUCTS = [
    Product(
        id="1",
        name="Wireless Headphones",
        description="High-quality wireless headphones with noise cancellation",
        price=Decimal("99.99"),
        category="Electronics",
        image="https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=500&h=500&fit=crop",
        stock=50,
        featured=True,
    ),
    Product(
        id="2",
        name="Smart Watch",
        description="Feature-rich smartwatch with fitness tracking",
        price=Decimal("199.99"),
        category="Electronics",
        image="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=500&h=500&fit=crop",
        stock=30,
        featured=True,
    ),
    Product(
        id="3",
        name="Laptop Backpack",
        description="Durable laptop backpack with multiple compartments",
        price=Decimal("49.99"),
        category="Accessories",
        image="https://images.unsplash.com/photo-1553062407-98eeb64c6a62?w=500&h=500&fit=crop",
        stock=100,
    ),
    Product(
        id="4",
        name="Mechanical Keyboard",
        description="RGB mechanical keyboard with programmable keys",
        price=Decimal("129.99"),
        category="Electronics",
        image="https://images.unsplash.com/photo-1587829741301-dc798b83add3?w=500&h=500&fit=crop",
        stock=25,
        featured=True,
    ),
    Product(
        id="5",
        name="USB-C Hub",
        description="7-in-1 USB-C hub with multiple ports",
        price=Decimal("39.99"),
        category="Accessories",
        image="https://images.unsplash.com/photo-1625948515291-69613efd103f?w=500&h=500&fit=crop",
        stock=75,
    ),
    Product(
        id="6",
        name="Wireless Mouse",
        description="Ergonomic wireless mouse with precision tracking",
        price=Decimal("29.99"),
        category="Electronics",
        image="https://images.unsplash.com/photo-1527864550417-7fd91fc51a46?w=500&h=500&fit=crop",
        stock=60,
    ),
    Product(
        id="7",
        name="Phone Case",
        description="Protective phone case with shock absorption",
        price=Decimal("19.99"),
        category="Accessories",
        image="https://images.unsplash.com/photo-1601784551446-20c9e07cdbdb?w=500&h=500&fit=crop",
        stock=150,
    ),
    Product(
        id="8",
        name="Bluetooth Speaker",
        description="Portable Bluetooth speaker with 360° sound",
        price=Decimal("79.99"),
        category="Electronics",
        image="https://images.unsplash.com/photo-1608043152269-423dbba4e7e1?w=500&h=500&fit=crop",
        stock=40,
        featured=True,
    ),
]


def seed(storage: Storage, auth: AuthService | None = None) -> None:
    # not forcing: only seed what is missing
    if not storage.products.list():
        for product in PRODUCTS:
            storage.products.put(product.model_copy(deep=True))
        logger.info(f"Seeded {len(PRODUCTS)} products")

    auth = auth or AuthService(storage.users)
    if not auth.get_user_by_email(DEMO_EMAIL):
        auth.register(DEMO_EMAIL, DEMO_PASSWORD, DEMO_NAME)
        logger.info(f"Seeded demo user {DEMO_EMAIL}")
