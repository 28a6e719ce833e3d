from sqlalchemy import Column, String, DateTime, Numeric, JSON
from datetime import datetime, timezone

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)

    # cart lines as they were at placement time
    items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)

    status = Column(String, nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
