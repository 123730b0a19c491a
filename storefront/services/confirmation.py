"""Order confirmation view data"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import AsyncIterator, Optional

from ..models.common import Result
from ..models.order import Order, TrackingInfo
from .order_service import OrderService

logger = logging.getLogger(__name__)

# Delivery promise shown when tracking has no estimate of its own
DELIVERY_DAYS = 5


@dataclass
class ConfirmationView:
    order_id: str
    order: Result[Order]
    tracking: Result[TrackingInfo]

    @property
    def estimated_delivery(self) -> Optional[datetime]:
        if self.tracking.usable and self.tracking.value and self.tracking.value.estimated_delivery:
            return self.tracking.value.estimated_delivery
        if self.order.usable and self.order.value:
            return self.order.value.created_at + timedelta(days=DELIVERY_DAYS)
        return None


class OrderConfirmation:
    """Loads an order and its tracking, and polls for status changes"""

    def __init__(self, order_service: OrderService):
        self.order_service = order_service

    async def load(self, order_id: str) -> ConfirmationView:
        # Independent calls: a tracking failure never touches the order result
        order, tracking = await asyncio.gather(
            self.order_service.fetch_by_id(order_id),
            self.order_service.track(order_id),
        )
        if tracking.is_failed:
            logger.info(f"Continuing without tracking info for {order_id}: {tracking.error}")
        return ConfirmationView(order_id=order_id, order=order, tracking=tracking)

    async def watch_status(
        self,
        order_id: str,
        interval: float = 30.0,
        max_polls: Optional[int] = None,
    ) -> AsyncIterator[TrackingInfo]:
        """
        Poll tracking and yield each newly observed status.

        Stops after a terminal status or `max_polls` polls. Failed polls are
        skipped; the next poll simply tries again.
        """
        last_status = None
        polls = 0
        while max_polls is None or polls < max_polls:
            polls += 1
            result = await self.order_service.track(order_id)
            if result.usable and result.value is not None:
                info = result.value
                if info.status != last_status:
                    last_status = info.status
                    yield info
                    if info.status.is_terminal:
                        return
            if max_polls is not None and polls >= max_polls:
                return
            await asyncio.sleep(interval)
