import asyncio
from decimal import Decimal

import httpx
import pytest

from storefront import Storefront
from storefront.core.config import MockMode, Settings
from storefront.core.errors import StorageError
from storefront.core.storage import MemoryStorage
from storefront.mock_api import create_app
from storefront.models.common import Result
from storefront.models.product import Product

API_URL = "http://testserver/api"


def make_settings(mock_api: MockMode = MockMode.FALLBACK) -> Settings:
    return Settings(_env_file=None, api_url=API_URL, mock_api=mock_api, api_timeout=5.0)


def offline_transport() -> httpx.MockTransport:
    """Every request fails as if the server were unreachable"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


def forbidden_transport() -> httpx.MockTransport:
    """Fails the test if anything reaches the network"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"Unexpected request: {request.method} {request.url}")

    return httpx.MockTransport(handler)


class BrokenStorage(MemoryStorage):
    """Storage whose writes always fail"""

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("disk full")

    def remove_item(self, key: str) -> None:
        raise StorageError("disk full")


class FakeLookup:
    """Product lookup with per-product failures, sample data and delays"""

    def __init__(self, products, failing=(), delays=None, sample=()):
        self.products = {p.id: p for p in products}
        self.failing = set(failing)
        self.sample = set(sample)
        self.delays = delays or {}
        self.calls = []

    async def get_product(self, product_id):
        self.calls.append(product_id)
        await asyncio.sleep(self.delays.get(product_id, 0))
        if product_id in self.failing or product_id not in self.products:
            return Result.failed("Product not found")
        if product_id in self.sample:
            return Result.degraded(self.products[product_id], "API unavailable, showing sample data")
        return Result.success(self.products[product_id])


def product(product_id, price, name=None) -> Product:
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        price=Decimal(price),
        image="https://via.placeholder.com/150",
        category="electronics",
        stock=10,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mock_app():
    return create_app()


@pytest.fixture
async def shop(mock_app, storage, settings):
    """Storefront talking to the in-process mock API"""
    storefront = Storefront.from_settings(
        settings,
        storage=storage,
        transport=httpx.ASGITransport(app=mock_app),
    )
    yield storefront
    await storefront.close()


@pytest.fixture
async def offline_shop(storage, settings):
    """Storefront whose API is unreachable"""
    storefront = Storefront.from_settings(settings, storage=storage, transport=offline_transport())
    yield storefront
    await storefront.close()
