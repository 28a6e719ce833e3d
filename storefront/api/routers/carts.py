# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Query

from storefront.api.deps import get_cart_service
from storefront.api.errors import ok, to_http
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import AddItemIn, UpdateItemIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
def get_cart(
    cart_id: str = Query(..., alias="cartId", min_length=1),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return ok(svc.get_or_create_cart(cart_id))
    except StorefrontError as e:
        raise to_http(e)


@router.post("")
def add_item(payload: AddItemIn, svc: CartService = Depends(get_cart_service)):
    try:
        cart = svc.add_item(
            cart_id=payload.cart_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            user_id=payload.user_id,
        )
    except StorefrontError as e:
        raise to_http(e)
    return ok(cart)


@router.put("")
def update_item(payload: UpdateItemIn, svc: CartService = Depends(get_cart_service)):
    try:
        cart = svc.update_quantity(payload.cart_id, payload.product_id, payload.quantity)
    except StorefrontError as e:
        raise to_http(e)
    return ok(cart)


@router.delete("")
def remove_item(
    cart_id: str = Query(..., alias="cartId", min_length=1),
    product_id: str = Query(..., alias="productId", min_length=1),
    svc: CartService = Depends(get_cart_service),
):
    try:
        cart = svc.remove_item(cart_id, product_id)
    except StorefrontError as e:
        raise to_http(e)
    return ok(cart)
