"""
Order submission and lookup

Order state belongs to the server. The client submits once, then re-fetches
by id whenever it needs to show anything; status changes are never computed
locally.
"""

from ..models.common import Result
from ..models.order import Order, OrderRequest, TrackingInfo
from . import mock_data
from .base import ApiService


class OrderService(ApiService):
    """Submit, fetch and track orders with a local fallback for demos"""

    name = "OrderService"

    async def submit(self, request: OrderRequest) -> Result[Order]:
        """
        Create an order.

        If the API cannot be reached, a locally generated acknowledgment is
        returned instead, tagged degraded and `is_mock`. A rejection from the
        server is a failure and is not replaced.
        """
        return await self._call(
            f"Saving order ({len(request.items)} items, total {request.total})",
            lambda: self.client.create_order(request.to_wire()),
            Order.model_validate,
            lambda: mock_data.mock_order_ack(request),
        )

    async def fetch_by_id(self, order_id: str) -> Result[Order]:
        return await self._call(
            f"Fetching order {order_id}",
            lambda: self.client.get_order(order_id),
            Order.model_validate,
            lambda: mock_data.sample_order(order_id),
        )

    async def track(self, order_id: str) -> Result[TrackingInfo]:
        """Tracking is supplementary; its failures stay in its own result"""
        return await self._call(
            f"Tracking order {order_id}",
            lambda: self.client.get_order_tracking(order_id),
            TrackingInfo.model_validate,
            mock_data.sample_tracking,
        )

    async def list_user_orders(self) -> Result[list[Order]]:
        return await self._call(
            "Fetching user orders",
            self.client.get_user_orders,
            lambda data: [Order.model_validate(order) for order in data],
            mock_data.sample_user_orders,
        )
