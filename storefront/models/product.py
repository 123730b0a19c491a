"""Product models"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from .common import Identifier, WireModel


class Product(WireModel):
    """Product in the catalog"""
    id: Identifier
    name: str
    description: Optional[str] = None
    price: Decimal = Field(ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    stock: int = Field(ge=0, default=0)
    rating: Optional[float] = None
    reviews: Optional[int] = None


class Category(WireModel):
    """Product category"""
    id: Identifier
    name: str
    slug: str
    description: Optional[str] = None


class ProductPage(WireModel):
    """A page of product results"""
    products: list[Product] = []
    total: int = 0
    page: int = 1
    pages: int = 1
