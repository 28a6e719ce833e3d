# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import Product
from storefront.repos.base import ProductRepo


def product_from_row(row: ProductModel) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=row.price,
        category=row.category,
        image=row.image,
        stock=row.stock,
        featured=row.featured,
    )


class SqlProductRepo(ProductRepo):
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: str) -> Product | None:
        row = self.db.get(ProductModel, product_id)
        return product_from_row(row) if row else None

    def list(self) -> List[Product]:
        rows = self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        return [product_from_row(r) for r in rows]

    def put(self, product: Product) -> Product:
        self.db.merge(ProductModel(**product.model_dump()))
        self.db.commit()
        return product

    def decrement_stock(self, product_id: str, amount: int) -> bool:
        # UPDATE products SET stock = stock - :n WHERE id = :id AND stock >= :n
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= amount)
            .values(stock=ProductModel.stock - amount)
        )
        if result.rowcount == 0:
            self.db.rollback()
            return False
        self.db.commit()
        # identity map may still hold the old stock value
        self.db.expire_all()
        return True

    def increment_stock(self, product_id: str, amount: int) -> bool:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + amount)
        )
        self.db.commit()
        self.db.expire_all()
        return result.rowcount > 0
