# storefront/repos/cart_repo.py
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.schemas import Cart, CartItem
from storefront.repos.base import CartRepo
from storefront.repos.product_repo import product_from_row


class SqlCartRepo(CartRepo):
    """
    Carts as rows, line items as rows joined to products.
    Item prices are always the current catalog prices.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, cart_id: str) -> Cart | None:
        row = self.db.get(CartModel, cart_id)
        if not row:
            return None
        return Cart(
            id=row.id,
            user_id=row.user_id,
            items=[
                CartItem(product=product_from_row(i.product), quantity=i.quantity)
                for i in row.items
            ],
            total=row.total,
        )

    def put(self, cart: Cart) -> Cart:
        row = self.db.get(CartModel, cart.id)
        if not row:
            row = CartModel(id=cart.id)
            self.db.add(row)

        row.user_id = cart.user_id
        row.total = cart.total

        # sync lines by product id; update in place so the unique constraint holds
        wanted = {item.product.id: (pos, item) for pos, item in enumerate(cart.items)}
        for existing in list(row.items):
            if existing.product_id not in wanted:
                row.items.remove(existing)

        current = {i.product_id: i for i in row.items}
        for product_id, (pos, item) in wanted.items():
            line = current.get(product_id)
            if line:
                line.quantity = item.quantity
                line.position = pos
            else:
                row.items.append(
                    CartItemModel(product_id=product_id, quantity=item.quantity, position=pos)
                )

        self.db.commit()
        return cart
