# storefront/repos/base.py
from abc import ABC, abstractmethod
from typing import List

from storefront.domain.schemas import Cart, Order, Product, UserRecord


class ProductRepo(ABC):
    @abstractmethod
    def get(self, product_id: str) -> Product | None: ...

    @abstractmethod
    def list(self) -> List[Product]: ...

    @abstractmethod
    def put(self, product: Product) -> Product: ...

    @abstractmethod
    def decrement_stock(self, product_id: str, amount: int) -> bool:
        """Conditional decrement: only when the product exists and stock >= amount."""

    @abstractmethod
    def increment_stock(self, product_id: str, amount: int) -> bool: ...


class CartRepo(ABC):
    @abstractmethod
    def get(self, cart_id: str) -> Cart | None: ...

    @abstractmethod
    def put(self, cart: Cart) -> Cart: ...


class OrderRepo(ABC):
    @abstractmethod
    def get(self, order_id: str) -> Order | None: ...

    @abstractmethod
    def put(self, order: Order) -> Order: ...

    @abstractmethod
    def list(self, user_id: str | None = None) -> List[Order]:
        """Orders in no particular order; filtered by owner when user_id is given."""


class UserRepo(ABC):
    @abstractmethod
    def get(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> UserRecord | None: ...

    @abstractmethod
    def put(self, user: UserRecord) -> UserRecord: ...
