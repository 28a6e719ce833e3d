# storefront/data/models/cart.py
from sqlalchemy import Column, Numeric, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=True, index=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
    )
