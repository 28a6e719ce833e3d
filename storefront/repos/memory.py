# storefront/repos/memory.py
import threading
from typing import Dict, List, TypeVar

from pydantic import BaseModel

from storefront.domain.schemas import Cart, Order, Product, UserRecord
from storefront.repos.base import CartRepo, OrderRepo, ProductRepo, UserRepo

T = TypeVar("T", bound=BaseModel)


class _Table:
    """
    Process-local table keyed by id.
    Values are deep-copied in and out, callers never share state with the store.
    """

    def __init__(self):
        self.rows: Dict[str, BaseModel] = {}
        self.mutex = threading.Lock()

    def get(self, key: str):
        with self.mutex:
            row = self.rows.get(key)
            return row.model_copy(deep=True) if row is not None else None

    def put(self, key: str, value: T) -> T:
        with self.mutex:
            self.rows[key] = value.model_copy(deep=True)
        return value

    def values(self) -> list:
        with self.mutex:
            return [row.model_copy(deep=True) for row in self.rows.values()]


class InMemoryProductRepo(ProductRepo):
    def __init__(self, products: List[Product] | None = None):
        self.table = _Table()
        for product in products or []:
            self.put(product)

    def get(self, product_id: str) -> Product | None:
        return self.table.get(product_id)

    def list(self) -> List[Product]:
        return self.table.values()

    def put(self, product: Product) -> Product:
        return self.table.put(product.id, product)

    def decrement_stock(self, product_id: str, amount: int) -> bool:
        with self.table.mutex:
            product = self.table.rows.get(product_id)
            if product is None or product.stock < amount:
                return False
            product.stock -= amount
            return True

    def increment_stock(self, product_id: str, amount: int) -> bool:
        with self.table.mutex:
            product = self.table.rows.get(product_id)
            if product is None:
                return False
            product.stock += amount
            return True


class InMemoryCartRepo(CartRepo):
    def __init__(self):
        self.table = _Table()

    def get(self, cart_id: str) -> Cart | None:
        return self.table.get(cart_id)

    def put(self, cart: Cart) -> Cart:
        return self.table.put(cart.id, cart)


class InMemoryOrderRepo(OrderRepo):
    def __init__(self):
        self.table = _Table()

    def get(self, order_id: str) -> Order | None:
        return self.table.get(order_id)

    def put(self, order: Order) -> Order:
        return self.table.put(order.id, order)

    def list(self, user_id: str | None = None) -> List[Order]:
        orders = self.table.values()
        if user_id is None:
            return orders
        return [o for o in orders if o.user_id == user_id]


class InMemoryUserRepo(UserRepo):
    def __init__(self):
        self.table = _Table()

    def get(self, user_id: str) -> UserRecord | None:
        return self.table.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.table.values() if u.email == email), None)

    def put(self, user: UserRecord) -> UserRecord:
        return self.table.put(user.id, user)
