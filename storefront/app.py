"""Wiring for the storefront services"""

import logging
from typing import Optional

import httpx

from .core.config import Settings, get_settings
from .core.session import AuthSession
from .core.storage import KeyValueStorage, create_storage
from .services.api_client import StorefrontClient
from .services.auth_service import AuthService
from .services.cart_service import CartReconciliationService
from .services.cart_store import CartStore
from .services.checkout import CheckoutFlow
from .services.confirmation import OrderConfirmation
from .services.order_service import OrderService
from .services.product_service import ProductService

logger = logging.getLogger(__name__)


class Storefront:
    """
    One client-side storefront instance.

    Usage:
        async with Storefront.from_settings() as shop:
            shop.cart.add(1, 2)
            checkout = shop.new_checkout()
            if await checkout.start() is None:
                ...
    """

    def __init__(
        self,
        settings: Settings,
        storage: KeyValueStorage,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.storage = storage
        self.session = AuthSession(storage)
        self.client = StorefrontClient.from_settings(
            settings,
            token_provider=lambda: self.session.token,
            transport=transport,
        )
        self.products = ProductService(self.client, settings)
        self.orders = OrderService(self.client, settings)
        self.auth = AuthService(self.client, self.session, settings)
        self.cart = CartStore(storage, key=settings.cart_storage_key)
        self.cart_view = CartReconciliationService(
            self.cart,
            self.products,
            accept_sample_data=settings.mock_always,
        )
        self.confirmation = OrderConfirmation(self.orders)

        logger.debug(f"Storefront ready: api={settings.api_url} mock={settings.mock_api.value}")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        storage: Optional[KeyValueStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Storefront":
        settings = settings or get_settings()
        return cls(settings, storage or create_storage(settings.storage_path), transport)

    def new_checkout(self) -> CheckoutFlow:
        return CheckoutFlow(
            self.cart_view,
            self.cart,
            self.orders,
            allow_sample_prices=self.settings.mock_always,
        )

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
