# storefront/services/order_service.py
import uuid
from typing import Dict, FrozenSet, List

from storefront.domain.errors import (
    EmptyCartError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from storefront.domain.schemas import Cart, Order, OrderStatus, ShippingAddress, utc_now
from storefront.repos.base import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.lock_service import LockService, cart_key, product_key
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# delivered and cancelled are terminal
ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderService:
    """
    Service for the order domain, kept apart from CartService.
    Orders are immutable snapshots, only status and updated_at change.
    """

    def __init__(
        self,
        orders: OrderRepo,
        cart_service: CartService,
        catalog: CatalogService,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.repo = orders
        self.cart_service = cart_service
        self.catalog = catalog
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def create_order(self, user_id: str, cart_id: str, shipping_address: ShippingAddress) -> Order:
        """
        Use Case: place an order from a cart.

        1. Cart must exist and hold items
        2. Every line is re-checked against current stock before anything changes
        3. Stock is decremented for every line
        4. Order snapshot is stored, the cart is cleared, notification goes out
        """
        cart = self.cart_service.get_cart(cart_id)
        if not cart or not cart.items:
            raise EmptyCartError(cart_id)

        with self.lock_service.lock(cart_key(cart_id)):
            # re-read under the lock, the cart may have changed meanwhile
            cart = self.cart_service.get_cart(cart_id)
            if not cart or not cart.items:
                raise EmptyCartError(cart_id)

            if cart.user_id is not None and cart.user_id != user_id:
                raise PermissionError("Cart belongs to another user")

            product_keys = [product_key(i.product.id) for i in cart.items]
            with self.lock_service.lock(*product_keys):
                order = self._place(user_id, cart, shipping_address)

            self.cart_service.clear(cart_id)

        logger.info(f"Order {order.id} created from cart {cart_id}, total {order.total}")

        self.notification_service.send_order_notification(order, "placed")
        return order

    def _place(self, user_id: str, cart: Cart, shipping_address: ShippingAddress) -> Order:
        # pre-pass: nothing is mutated until every line passes
        for item in cart.items:
            product = self.catalog.get_product(item.product.id)
            available = product.stock if product else 0
            if item.quantity > available:
                logger.warning(
                    f"Order from cart {cart.id} rejected: product {item.product.id} "
                    f"requested {item.quantity}, available {available}"
                )
                raise InsufficientStockError(
                    item.product.id, item.quantity, available, item.product.name
                )

        decremented = []
        for item in cart.items:
            if not self.catalog.decrement_stock(item.product.id, item.quantity):
                # only reachable when stock moved outside the lock
                for done in decremented:
                    self.catalog.restore_stock(done.product.id, done.quantity)
                product = self.catalog.get_product(item.product.id)
                raise InsufficientStockError(
                    item.product.id,
                    item.quantity,
                    product.stock if product else 0,
                    item.product.name,
                )
            decremented.append(item)

        now = utc_now()
        order = Order(
            id=str(uuid.uuid4()),
            user_id=user_id,
            items=[i.model_copy(deep=True) for i in cart.items],
            total=cart.total,
            status=OrderStatus.PENDING,
            shipping_address=shipping_address.model_copy(deep=True),
            created_at=now,
            updated_at=now,
        )
        return self.repo.put(order)

    def get_order(self, order_id: str) -> Order | None:
        return self.repo.get(order_id)

    def get_user_orders(self, user_id: str) -> List[Order]:
        return sorted(self.repo.list(user_id=user_id), key=lambda o: o.created_at, reverse=True)

    def get_all_orders(self) -> List[Order]:
        return sorted(self.repo.list(), key=lambda o: o.created_at, reverse=True)

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        status = OrderStatus(status)

        with self.lock_service.lock(f"order:{order_id}"):
            order = self.repo.get(order_id)
            if not order:
                raise OrderNotFoundError(order_id)

            if status not in ALLOWED_TRANSITIONS[order.status]:
                raise InvalidStatusTransitionError(order_id, order.status.value, status.value)

            previous = order.status
            order.status = status
            order.updated_at = utc_now()
            self.repo.put(order)

        logger.info(f"Order {order_id} status {previous.value} -> {status.value}")

        self.notification_service.send_order_notification(order, f"status_{status.value}")
        return order
