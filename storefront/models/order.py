"""
Order models

One canonical order schema. Older payloads use `_id`, `shippingInfo`,
`paymentInfo`, `cardLastFour`, `productId` and split first/last names; those
are rewritten into the canonical shape before validation.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from .common import Identifier, WireModel


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class ShippingSummary(WireModel):
    """Shipping details attached to an order"""
    name: str
    address: str
    city: str
    state: str = ""
    zip_code: str
    country: str = ""
    phone: str

    @model_validator(mode="before")
    @classmethod
    def _join_names(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            first = data.get("firstName") or data.get("first_name") or ""
            last = data.get("lastName") or data.get("last_name") or ""
            if first or last:
                data = {**data, "name": f"{first} {last}".strip()}
        return data


class PaymentSummary(WireModel):
    """Non-sensitive payment description: never more than the last four digits"""
    method: str = "credit"
    card_name: Optional[str] = None
    last_four: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "cardLastFour" in data and "lastFour" not in data:
            data["lastFour"] = data.pop("cardLastFour")
        card_number = data.pop("cardNumber", None) or data.pop("card_number", None)
        if card_number and not (data.get("lastFour") or data.get("last_four")):
            data["lastFour"] = str(card_number)
        return data

    @field_validator("last_four", mode="before")
    @classmethod
    def _keep_last_four(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        digits = "".join(ch for ch in str(value) if ch.isdigit())
        return digits[-4:] or None


class OrderItem(WireModel):
    """Snapshot of a cart line at submission time"""
    id: Identifier
    quantity: int = Field(ge=1)
    name: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    category: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "productId" in data:
            data = {**data, "id": data["productId"]}
        return data


class OrderRequest(WireModel):
    """Payload sent to create an order"""
    items: list[OrderItem]
    total: Decimal
    shipping: ShippingSummary
    payment: PaymentSummary


class Order(WireModel):
    """Order as reported by the API (or synthesized locally when is_mock)"""
    id: str
    items: list[OrderItem] = []
    total: Decimal = Decimal("0")
    shipping: Optional[ShippingSummary] = None
    payment: Optional[PaymentSummary] = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    user_id: Optional[Identifier] = None
    is_mock: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "id" not in data and "_id" in data:
            data["id"] = data.pop("_id")
        if "shipping" not in data and "shippingInfo" in data:
            data["shipping"] = data.pop("shippingInfo")
        if "payment" not in data and "paymentInfo" in data:
            data["payment"] = data.pop("paymentInfo")
        if "id" in data:
            data["id"] = str(data["id"])
        return data

    @property
    def items_total(self) -> Decimal:
        return sum(
            (item.price * item.quantity for item in self.items if item.price is not None),
            Decimal("0"),
        )


class TrackingUpdate(WireModel):
    """One event on an order's tracking timeline"""
    status: str
    timestamp: datetime
    location: Optional[str] = None


class TrackingInfo(WireModel):
    """Shipment tracking for an order"""
    status: OrderStatus
    estimated_delivery: Optional[datetime] = None
    current_location: Optional[str] = None
    updates: list[TrackingUpdate] = []
    is_mock: bool = False

    @field_validator("updates")
    @classmethod
    def _oldest_first(cls, updates: list[TrackingUpdate]) -> list[TrackingUpdate]:
        return sorted(updates, key=lambda u: u.timestamp)
