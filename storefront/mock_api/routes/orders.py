"""Order API routes for the mock API"""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...models.auth import Role, User
from ...models.order import Order, OrderRequest, OrderStatus, TrackingInfo
from ..database import InvalidTransition, OrderDatabase, ProductDatabase
from ..deps import get_order_db, get_product_db
from ..security import optional_user, require_roles, require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])

TOTAL_TOLERANCE = Decimal("0.01")


class StatusUpdateRequest(BaseModel):
    status: OrderStatus


@router.post("", response_model=Order, status_code=201)
async def create_order(
    request: OrderRequest,
    user: Optional[User] = Depends(optional_user),
    order_db: OrderDatabase = Depends(get_order_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """
    Place an order.

    Every line is checked against the catalog: the product must exist, be
    priced at the current price and be in stock, and the submitted total
    must match the lines.
    """
    if not request.items:
        raise HTTPException(status_code=400, detail="Order has no items")

    for item in request.items:
        product = product_db.get_product(item.id)
        if not product:
            raise HTTPException(status_code=400, detail=f"Unknown product {item.id}")
        if item.price is None:
            raise HTTPException(status_code=400, detail=f"Missing price for {product.name}")
        if item.price != product.price:
            raise HTTPException(status_code=409, detail=f"Price of {product.name} has changed")
        if product.stock < item.quantity:
            raise HTTPException(
                status_code=400,
                detail=f"Insufficient stock for {product.name}. Available: {product.stock}",
            )

    expected = sum((item.price * item.quantity for item in request.items), Decimal("0"))
    if abs(expected - request.total) > TOTAL_TOLERANCE:
        raise HTTPException(status_code=400, detail="Order total does not match items")

    for item in request.items:
        product_db.update_stock(item.id, -item.quantity)

    order = order_db.create_order(request, user_id=user.id if user else None)
    logger.info(f"Order {order.id} created: {order.total} ({len(order.items)} items)")
    return order


@router.get("/user", response_model=list[Order])
async def list_user_orders(
    user: User = Depends(require_user),
    order_db: OrderDatabase = Depends(get_order_db),
):
    """Orders placed by the signed-in user"""
    return order_db.list_for_user(user.id)


@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, order_db: OrderDatabase = Depends(get_order_db)):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/{order_id}/tracking", response_model=TrackingInfo)
async def get_tracking(order_id: str, order_db: OrderDatabase = Depends(get_order_db)):
    tracking = order_db.tracking(order_id)
    if not tracking:
        raise HTTPException(status_code=404, detail="Order not found")
    return tracking


@router.patch("/{order_id}/status", response_model=Order)
async def update_status(
    order_id: str,
    request: StatusUpdateRequest,
    user: User = Depends(require_roles(Role.DELIVERY, Role.ADMIN)),
    order_db: OrderDatabase = Depends(get_order_db),
):
    """Advance an order's status (delivery staff and admins)"""
    try:
        order = order_db.update_status(order_id, request.status)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    logger.info(f"Order {order_id} moved to {request.status.value} by {user.email}")
    return order
