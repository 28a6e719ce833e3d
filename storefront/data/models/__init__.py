# every model imported here so SQLAlchemy registers it on Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel

__all__ = ["ProductModel", "UserModel", "CartModel", "CartItemModel", "OrderModel"]
