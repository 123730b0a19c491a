# Storefront services

from .api_client import StorefrontClient
from .auth_service import AuthService
from .cart_service import CartReconciliationService, ProductLookup
from .cart_store import CartStore
from .checkout import CheckoutFlow, CheckoutStep
from .confirmation import ConfirmationView, OrderConfirmation
from .order_service import OrderService
from .product_service import ProductService

__all__ = [
    "StorefrontClient",
    "AuthService",
    "CartReconciliationService",
    "ProductLookup",
    "CartStore",
    "CheckoutFlow",
    "CheckoutStep",
    "ConfirmationView",
    "OrderConfirmation",
    "OrderService",
    "ProductService",
]
