"""Order storage for the mock API"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from ...models.common import Identifier
from ...models.order import Order, OrderRequest, OrderStatus, TrackingInfo, TrackingUpdate

# Label and location recorded when an order enters a status
STATUS_EVENTS: dict[OrderStatus, tuple[str, Optional[str]]] = {
    OrderStatus.PENDING: ("Order Placed", "Online"),
    OrderStatus.PROCESSING: ("Processing", "Warehouse"),
    OrderStatus.IN_TRANSIT: ("In Transit", "Local Distribution Center"),
    OrderStatus.DELIVERED: ("Delivered", "Customer Address"),
    OrderStatus.COMPLETED: ("Completed", None),
    OrderStatus.CANCELLED: ("Cancelled", None),
}

ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.IN_TRANSIT, OrderStatus.CANCELLED},
    OrderStatus.IN_TRANSIT: {OrderStatus.DELIVERED, OrderStatus.COMPLETED},
    OrderStatus.DELIVERED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

DELIVERY_DAYS = 5


class InvalidTransition(Exception):
    """Requested status cannot follow the current one"""
    pass


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}
        self.history: dict[str, list[TrackingUpdate]] = {}

    def _record(self, order: Order, status: OrderStatus, at: datetime) -> None:
        label, location = STATUS_EVENTS[status]
        self.history.setdefault(order.id, []).append(
            TrackingUpdate(status=label, timestamp=at, location=location)
        )

    def create_order(self, request: OrderRequest, user_id: Optional[Identifier] = None) -> Order:
        """Create an order from a validated request"""
        now = datetime.now(timezone.utc)
        order = Order(
            id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            items=request.items,
            total=request.total,
            shipping=request.shipping,
            payment=request.payment,
            status=OrderStatus.PENDING,
            created_at=now,
            user_id=user_id,
        )
        self.orders[order.id] = order
        self._record(order, OrderStatus.PENDING, now)
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    def list_for_user(self, user_id: Identifier) -> list[Order]:
        """User's orders, newest first"""
        orders = [o for o in self.orders.values() if str(o.user_id) == str(user_id)]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def update_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        order = self.get_order(order_id)
        if not order:
            return None
        if status not in ALLOWED_TRANSITIONS[order.status]:
            raise InvalidTransition(f"Cannot move order from {order.status.value} to {status.value}")

        order.status = status
        self._record(order, status, datetime.now(timezone.utc))
        return order

    def tracking(self, order_id: str) -> Optional[TrackingInfo]:
        order = self.get_order(order_id)
        if not order:
            return None

        updates = self.history.get(order_id, [])
        current_location = next((u.location for u in reversed(updates) if u.location), None)
        estimated = None
        if not order.status.is_terminal:
            estimated = order.created_at + timedelta(days=DELIVERY_DAYS)

        return TrackingInfo(
            status=order.status,
            estimated_delivery=estimated,
            current_location=current_location,
            updates=updates,
        )
