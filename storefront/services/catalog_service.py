# storefront/services/catalog_service.py
from typing import List

from storefront.domain.schemas import Product
from storefront.repos.base import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Read side of the product catalog.
    The only write is decrement_stock, triggered by order placement, never by the catalog itself.
    """

    def __init__(self, products: ProductRepo):
        self.repo = products

    def get_all_products(self) -> List[Product]:
        return self.repo.list()

    def get_product(self, product_id: str) -> Product | None:
        return self.repo.get(product_id)

    def get_featured_products(self) -> List[Product]:
        return [p for p in self.repo.list() if p.featured]

    def get_products_by_category(self, category: str) -> List[Product]:
        wanted = category.lower()
        return [p for p in self.repo.list() if p.category.lower() == wanted]

    def search_products(self, query: str) -> List[Product]:
        q = query.lower()
        return [
            p
            for p in self.repo.list()
            if q in p.name.lower() or q in p.description.lower() or q in p.category.lower()
        ]

    def get_categories(self) -> List[str]:
        # dict keeps first-seen order
        return list(dict.fromkeys(p.category for p in self.repo.list()))

    def decrement_stock(self, product_id: str, amount: int) -> bool:
        ok = self.repo.decrement_stock(product_id, amount)
        if ok:
            logger.info(f"Stock of product {product_id} decremented by {amount}")
        else:
            logger.warning(f"Stock decrement of {amount} refused for product {product_id}")
        return ok

    def restore_stock(self, product_id: str, amount: int) -> bool:
        logger.info(f"Stock of product {product_id} restored by {amount}")
        return self.repo.increment_stock(product_id, amount)
