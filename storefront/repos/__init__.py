# storefront/repos/__init__.py
from dataclasses import dataclass

from sqlalchemy.orm import Session

from storefront.repos.base import CartRepo, OrderRepo, ProductRepo, UserRepo
from storefront.repos.cart_repo import SqlCartRepo
from storefront.repos.memory import (
    InMemoryCartRepo,
    InMemoryOrderRepo,
    InMemoryProductRepo,
    InMemoryUserRepo,
)
from storefront.repos.order_repo import SqlOrderRepo
from storefront.repos.product_repo import SqlProductRepo
from storefront.repos.user_repo import SqlUserRepo


@dataclass
class Storage:
    products: ProductRepo
    carts: CartRepo
    orders: OrderRepo
    users: UserRepo


def memory_storage() -> Storage:
    return Storage(
        products=InMemoryProductRepo(),
        carts=InMemoryCartRepo(),
        orders=InMemoryOrderRepo(),
        users=InMemoryUserRepo(),
    )


def sql_storage(db: Session) -> Storage:
    return Storage(
        products=SqlProductRepo(db),
        carts=SqlCartRepo(db),
        orders=SqlOrderRepo(db),
        users=SqlUserRepo(db),
    )


__all__ = [
    "Storage",
    "memory_storage",
    "sql_storage",
    "ProductRepo",
    "CartRepo",
    "OrderRepo",
    "UserRepo",
]
