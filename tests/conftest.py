import os

# must be set before anything from storefront reads its settings
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOCK_BACKEND"] = "local"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_notification_service, get_storage
from storefront.data.seed import PRODUCTS
from storefront.domain.schemas import Product, ShippingAddress
from storefront.repos import memory_storage
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.lock_service import LocalLockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService


class RecordingNotificationService(NotificationService):
    """Keeps what would have been sent instead of enqueueing it."""

    def __init__(self):
        super().__init__(enabled=True)
        self.sent = []

    def send_order_notification(self, order, event="placed"):
        self.sent.append((order.id, order.status.value, event))


PRODUCT_A = Product(
    id="a",
    name="Product A",
    description="First test product",
    price=Decimal("10.00"),
    category="Gadgets",
    image="a.png",
    stock=5,
)
PRODUCT_B = Product(
    id="b",
    name="Product B",
    description="Second test product",
    price=Decimal("5.50"),
    category="Gadgets",
    image="b.png",
    stock=1,
)


@pytest.fixture()
def storage():
    s = memory_storage()
    for product in PRODUCTS + [PRODUCT_A, PRODUCT_B]:
        s.products.put(product.model_copy(deep=True))
    return s


@pytest.fixture()
def lock_service():
    return LocalLockService(wait_seconds=1)


@pytest.fixture()
def notifier():
    return RecordingNotificationService()


@pytest.fixture()
def catalog(storage):
    return CatalogService(storage.products)


@pytest.fixture()
def cart_service(storage, catalog, lock_service):
    return CartService(storage.carts, catalog, lock_service)


@pytest.fixture()
def order_service(storage, cart_service, catalog, lock_service, notifier):
    return OrderService(storage.orders, cart_service, catalog, lock_service, notifier)


@pytest.fixture()
def auth_service(storage):
    return AuthService(storage.users, rounds=4)


@pytest.fixture()
def address():
    return ShippingAddress(
        full_name="Jane Doe",
        address="1 Main Street",
        city="Springfield",
        state="IL",
        zip_code="62701",
        country="US",
        phone="555-0100",
    )


@pytest.fixture()
def client(storage, lock_service, notifier):
    app = create_app()
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notification_service] = lambda: notifier
    return TestClient(app)
