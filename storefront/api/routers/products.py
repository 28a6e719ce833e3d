# storefront/api/routers/products.py
from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_catalog_service
from storefront.api.errors import ok
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
def list_products(
    category: str | None = Query(None),
    search: str | None = Query(None),
    featured: str | None = Query(None),
    svc: CatalogService = Depends(get_catalog_service),
):
    # search > category > featured > all
    if search:
        products = svc.search_products(search)
    elif category:
        products = svc.get_products_by_category(category)
    elif featured == "true":
        products = svc.get_featured_products()
    else:
        products = svc.get_all_products()

    return ok(products, count=len(products))


@router.get("/categories")
def list_categories(svc: CatalogService = Depends(get_catalog_service)):
    return ok(svc.get_categories())


@router.get("/{product_id}")
def get_product(product_id: str, svc: CatalogService = Depends(get_catalog_service)):
    product = svc.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ok(product)
