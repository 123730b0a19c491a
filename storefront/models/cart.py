"""Cart models"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from .common import Identifier, WireModel
from .product import Product


class CartLine(WireModel):
    """Persisted cart entry: identity and quantity only"""
    id: Identifier
    quantity: int = Field(ge=1)


class MaterializedCartLine(WireModel):
    """
    Cart line joined with current product data.

    Rebuilt on every read. A line whose lookup failed keeps only `id` and
    `quantity` and has `resolved` set to False. Lines priced from sample
    data carry `is_mock`.
    """
    id: Identifier
    quantity: int = Field(ge=1)
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    resolved: bool = True
    is_mock: bool = False

    @classmethod
    def from_product(cls, product: Product, quantity: int, is_mock: bool = False) -> "MaterializedCartLine":
        return cls(**product.model_dump(), quantity=quantity, is_mock=is_mock)

    @classmethod
    def unresolved(cls, line: CartLine) -> "MaterializedCartLine":
        return cls(id=line.id, quantity=line.quantity, resolved=False)
