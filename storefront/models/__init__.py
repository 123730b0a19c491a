# Storefront Models

from .common import Identifier, Notification, Outcome, Redirect, Result, Severity
from .product import Category, Product, ProductPage
from .cart import CartLine, MaterializedCartLine
from .order import (
    Order,
    OrderItem,
    OrderRequest,
    OrderStatus,
    PaymentSummary,
    ShippingSummary,
    TrackingInfo,
    TrackingUpdate,
)
from .auth import AuthResponse, Role, User
from .forms import PaymentForm, RegistrationForm, ShippingForm

__all__ = [
    "Identifier",
    "Notification",
    "Outcome",
    "Redirect",
    "Result",
    "Severity",
    "Category",
    "Product",
    "ProductPage",
    "CartLine",
    "MaterializedCartLine",
    "Order",
    "OrderItem",
    "OrderRequest",
    "OrderStatus",
    "PaymentSummary",
    "ShippingSummary",
    "TrackingInfo",
    "TrackingUpdate",
    "AuthResponse",
    "Role",
    "User",
    "PaymentForm",
    "RegistrationForm",
    "ShippingForm",
]
