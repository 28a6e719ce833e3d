# storefront/repos/order_repo.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.schemas import CartItem, Order
from storefront.repos.base import OrderRepo


def _aware(value: datetime) -> datetime:
    # sqlite drops tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _item_to_json(item: CartItem) -> dict:
    data = item.model_dump(mode="json")
    # keep the exact decimal, not the float the API renders
    data["product"]["price"] = str(item.product.price)
    return data


class SqlOrderRepo(OrderRepo):
    def __init__(self, db: Session):
        self.db = db

    def _to_domain(self, row: OrderModel) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=[CartItem.model_validate(i) for i in row.items],
            total=row.total,
            status=row.status,
            shipping_address=row.shipping_address,
            created_at=_aware(row.created_at),
            updated_at=_aware(row.updated_at),
        )

    def get(self, order_id: str) -> Order | None:
        row = self.db.get(OrderModel, order_id)
        return self._to_domain(row) if row else None

    def put(self, order: Order) -> Order:
        self.db.merge(
            OrderModel(
                id=order.id,
                user_id=order.user_id,
                items=[_item_to_json(i) for i in order.items],
                shipping_address=order.shipping_address.model_dump(mode="json"),
                status=order.status.value,
                total=order.total,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
        )
        self.db.commit()
        return order

    def list(self, user_id: str | None = None) -> List[Order]:
        query = select(OrderModel)
        if user_id is not None:
            query = query.where(OrderModel.user_id == user_id)
        rows = self.db.execute(query).scalars().all()
        return [self._to_domain(r) for r in rows]
