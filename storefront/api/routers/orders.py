# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_order_service
from storefront.api.errors import ok, to_http
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CreateOrderIn, UpdateStatusIn
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("")
def list_user_orders(
    user_id: str = Query(..., alias="userId", min_length=1),
    svc: OrderService = Depends(get_order_service),
):
    return ok(svc.get_user_orders(user_id))


@router.post("", status_code=201)
def create_order(payload: CreateOrderIn, svc: OrderService = Depends(get_order_service)):
    """
    Places an order from the cart, decrements stock and clears the cart.
    Notification is sent asynchronously.
    """
    try:
        order = svc.create_order(payload.user_id, payload.cart_id, payload.shipping_address)
    except (StorefrontError, PermissionError) as e:
        raise to_http(e)
    return ok(order)


@router.get("/{order_id}")
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    order = svc.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return ok(order)


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: str,
    payload: UpdateStatusIn,
    svc: OrderService = Depends(get_order_service),
):
    try:
        return ok(svc.update_status(order_id, payload.status))
    except StorefrontError as e:
        raise to_http(e)


@admin_router.get("/orders")
def list_all_orders(svc: OrderService = Depends(get_order_service)):
    orders = svc.get_all_orders()
    return ok(orders, count=len(orders))
