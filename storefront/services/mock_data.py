"""
Canned responses used when the API is mocked or unreachable.

Everything here is marked `is_mock` where the model allows it so callers can
tell sample data from server data.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from ..models.auth import Role, User
from ..models.common import Identifier
from ..models.order import (
    Order,
    OrderItem,
    OrderRequest,
    OrderStatus,
    PaymentSummary,
    ShippingSummary,
    TrackingInfo,
    TrackingUpdate,
)
from ..models.product import Category, Product, ProductPage

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150"

SAMPLE_PRODUCTS = [
    Product(
        id=1,
        name="Sample Product 1",
        description="A sample product description",
        price=Decimal("29.99"),
        image=PLACEHOLDER_IMAGE,
        category="electronics",
        stock=10,
        rating=4.5,
        reviews=25,
    ),
    Product(
        id=2,
        name="Sample Product 2",
        description="Another sample product description",
        price=Decimal("19.99"),
        image=PLACEHOLDER_IMAGE,
        category="clothing",
        stock=15,
        rating=4.0,
        reviews=18,
    ),
]

SAMPLE_CATEGORIES = [
    Category(id=1, name="Electronics", slug="electronics", description="Electronic devices and accessories"),
    Category(id=2, name="Clothing", slug="clothing", description="Fashion and apparel"),
    Category(id=3, name="Books", slug="books", description="Books and literature"),
]

MOCK_USERS = {
    Role.ADMIN: User(
        id=1,
        username="admin_user",
        email="admin@example.com",
        first_name="Admin",
        last_name="User",
        role=Role.ADMIN,
        phone="+1 234 567 8900",
    ),
    Role.USER: User(
        id=2,
        username="demo_user",
        email="demo@example.com",
        first_name="Demo",
        last_name="User",
        role=Role.USER,
        phone="+1 234 567 8901",
    ),
    Role.DELIVERY: User(
        id=3,
        username="delivery_user",
        email="delivery@example.com",
        first_name="Delivery",
        last_name="User",
        role=Role.DELIVERY,
        phone="+1 234 567 8902",
    ),
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def generate_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:8].upper()}"


def sample_product(product_id: Identifier) -> Product:
    return SAMPLE_PRODUCTS[0].model_copy(update={"id": product_id, "name": "Sample Product"})


def sample_product_page(category: Optional[str] = None) -> ProductPage:
    products = SAMPLE_PRODUCTS
    if category:
        products = [p.model_copy(update={"category": category}) for p in SAMPLE_PRODUCTS[:1]]
    return ProductPage(products=products, total=len(products), page=1, pages=1)


def mock_order_ack(request: OrderRequest) -> Order:
    """Local acknowledgment echoing the submitted order"""
    return Order(
        id=generate_order_id(),
        items=request.items,
        total=request.total,
        shipping=request.shipping,
        payment=request.payment,
        status=OrderStatus.PENDING,
        created_at=_now(),
        is_mock=True,
    )


def sample_order(order_id: str) -> Order:
    item = OrderItem(id=1, quantity=2, price=Decimal("29.99"), name="Sample Product", image=PLACEHOLDER_IMAGE)
    return Order(
        id=order_id,
        items=[item],
        total=item.price * item.quantity,
        shipping=ShippingSummary(
            name="John Doe",
            address="123 Main St",
            city="Sample City",
            state="ST",
            zip_code="12345",
            country="Sample Country",
            phone="123-456-7890",
        ),
        payment=PaymentSummary(method="credit", card_name="John Doe", last_four="4242"),
        status=OrderStatus.PENDING,
        created_at=_now(),
        is_mock=True,
    )


def sample_tracking() -> TrackingInfo:
    now = _now()
    return TrackingInfo(
        status=OrderStatus.IN_TRANSIT,
        estimated_delivery=now + timedelta(days=3),
        current_location="Local Distribution Center",
        updates=[
            TrackingUpdate(status="Order Placed", timestamp=now - timedelta(hours=1), location="Online"),
            TrackingUpdate(status="Processing", timestamp=now, location="Warehouse"),
        ],
        is_mock=True,
    )


def sample_user_orders() -> list[Order]:
    # Stored in the older wire shape; the Order model normalizes it
    now = _now()
    shipping_info = {
        "firstName": "John",
        "lastName": "Doe",
        "address": "123 Main St",
        "city": "Tirana",
        "state": "",
        "zipCode": "1000",
        "country": "Albania",
        "phone": "+355 69 123 4567",
    }
    payment_info = {"method": "credit", "cardName": "John Doe", "cardLastFour": "1234"}
    raw = [
        {
            "_id": generate_order_id(),
            "items": [{"productId": "mock-product-1", "quantity": 1, "price": "29.99", "name": "Mock Product 1"}],
            "total": "29.99",
            "shippingInfo": shipping_info,
            "paymentInfo": payment_info,
            "status": "delivered",
            "createdAt": (now - timedelta(days=30)).isoformat(),
            "isMock": True,
        },
        {
            "_id": generate_order_id(),
            "items": [{"productId": "mock-product-2", "quantity": 2, "price": "19.99", "name": "Mock Product 2"}],
            "total": "39.98",
            "shippingInfo": shipping_info,
            "paymentInfo": payment_info,
            "status": "processing",
            "createdAt": (now - timedelta(days=5)).isoformat(),
            "isMock": True,
        },
    ]
    return [Order.model_validate(order) for order in raw]
