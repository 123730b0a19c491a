"""Product lookup and catalog reads"""

from typing import Any

from ..models.common import Identifier, Result
from ..models.product import Category, Product, ProductPage
from . import mock_data
from .base import ApiService


class ProductService(ApiService):
    """Authoritative product data; the cart never keeps its own copy"""

    name = "ProductService"

    async def get_product(self, product_id: Identifier) -> Result[Product]:
        return await self._call(
            f"Fetching product {product_id}",
            lambda: self.client.get_product(product_id),
            Product.model_validate,
            lambda: mock_data.sample_product(product_id),
        )

    async def get_products(self, **filters: Any) -> Result[ProductPage]:
        return await self._call(
            f"Fetching products with filters {filters}",
            lambda: self.client.get_products(**filters),
            ProductPage.model_validate,
            mock_data.sample_product_page,
        )

    async def search_products(self, query: str, **filters: Any) -> Result[ProductPage]:
        return await self._call(
            f"Searching products: {query!r}",
            lambda: self.client.search_products(query, **filters),
            ProductPage.model_validate,
            lambda: mock_data.sample_product_page(),
        )

    async def get_categories(self) -> Result[list[Category]]:
        return await self._call(
            "Fetching categories",
            self.client.get_categories,
            lambda data: [Category.model_validate(c) for c in data],
            lambda: list(mock_data.SAMPLE_CATEGORIES),
        )

    async def get_products_by_category(self, category_id: Identifier, **filters: Any) -> Result[ProductPage]:
        return await self._call(
            f"Fetching products for category {category_id}",
            lambda: self.client.get_products_by_category(category_id, **filters),
            ProductPage.model_validate,
            lambda: mock_data.sample_product_page(str(category_id)),
        )
