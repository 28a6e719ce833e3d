# storefront/api/deps.py
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from storefront.data.database import SessionLocal
from storefront.repos import Storage, memory_storage, sql_storage
from storefront.services.auth_service import AuthService
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.lock_service import LocalLockService, LockService, RedisLockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.utils.settings import LOCK_BACKEND, STORAGE_BACKEND


@lru_cache
def get_lock_service() -> LockService:
    if LOCK_BACKEND == "redis":
        return RedisLockService()
    return LocalLockService()


@lru_cache
def get_notification_service() -> NotificationService:
    return NotificationService()


@lru_cache
def _shared_memory_storage() -> Storage:
    # memory backend: one set of tables for the whole process
    return memory_storage()


@contextmanager
def open_storage() -> Iterator[Storage]:
    if STORAGE_BACKEND == "sql":
        db = SessionLocal()
        try:
            yield sql_storage(db)
        finally:
            db.close()
    else:
        yield _shared_memory_storage()


def get_storage():
    with open_storage() as storage:
        yield storage


def get_catalog_service(storage: Storage = Depends(get_storage)) -> CatalogService:
    return CatalogService(storage.products)


def get_cart_service(
    storage: Storage = Depends(get_storage),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(
        carts=storage.carts,
        catalog=CatalogService(storage.products),
        lock_service=lock_service,
    )


def get_order_service(
    storage: Storage = Depends(get_storage),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    catalog = CatalogService(storage.products)
    return OrderService(
        orders=storage.orders,
        cart_service=CartService(storage.carts, catalog, lock_service),
        catalog=catalog,
        lock_service=lock_service,
        notification_service=notification_service,
    )


def get_auth_service(storage: Storage = Depends(get_storage)) -> AuthService:
    return AuthService(storage.users)
