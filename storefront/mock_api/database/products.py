"""Mock product catalog"""

from decimal import Decimal
from typing import Optional

from ...models.common import Identifier
from ...models.product import Category, Product, ProductPage

CATEGORIES: list[Category] = [
    Category(id=1, name="Electronics", slug="electronics", description="Electronic devices and accessories"),
    Category(id=2, name="Clothing", slug="clothing", description="Fashion and apparel"),
    Category(id=3, name="Books", slug="books", description="Books and literature"),
    Category(id=4, name="Home", slug="home", description="Home and kitchen"),
]

PRODUCTS: list[Product] = [
    Product(
        id=1,
        name="Wireless Noise-Cancelling Headphones",
        description="Over-ear headphones with 30-hour battery life.",
        price=Decimal("149.99"),
        image="https://via.placeholder.com/300?text=Headphones",
        category="electronics",
        stock=25,
        rating=4.6,
        reviews=212,
    ),
    Product(
        id=2,
        name="Mechanical Keyboard",
        description="Tenkeyless keyboard with hot-swappable switches.",
        price=Decimal("89.00"),
        image="https://via.placeholder.com/300?text=Keyboard",
        category="electronics",
        stock=40,
        rating=4.4,
        reviews=98,
    ),
    Product(
        id=3,
        name="Merino Wool Sweater",
        description="Lightweight knit sweater, machine washable.",
        price=Decimal("65.50"),
        image="https://via.placeholder.com/300?text=Sweater",
        category="clothing",
        stock=60,
        rating=4.2,
        reviews=41,
    ),
    Product(
        id=4,
        name="Canvas Sneakers",
        description="Classic low-top sneakers with rubber sole.",
        price=Decimal("45.00"),
        image="https://via.placeholder.com/300?text=Sneakers",
        category="clothing",
        stock=0,
        rating=4.0,
        reviews=17,
    ),
    Product(
        id=5,
        name="The Pragmatic Cookbook",
        description="Weeknight recipes in under thirty minutes.",
        price=Decimal("24.95"),
        image="https://via.placeholder.com/300?text=Cookbook",
        category="books",
        stock=100,
        rating=4.8,
        reviews=305,
    ),
    Product(
        id=6,
        name="Pour-Over Coffee Set",
        description="Glass dripper, carafe and 100 paper filters.",
        price=Decimal("38.75"),
        image="https://via.placeholder.com/300?text=Coffee",
        category="home",
        stock=15,
        rating=4.5,
        reviews=64,
    ),
]


class ProductDatabase:
    """In-memory product storage"""

    def __init__(self):
        self.products: dict[str, Product] = {str(p.id): p.model_copy() for p in PRODUCTS}
        self.categories: list[Category] = [c.model_copy() for c in CATEGORIES]

    def get_product(self, product_id: Identifier) -> Optional[Product]:
        return self.products.get(str(product_id))

    def get_category(self, category_id: Identifier) -> Optional[Category]:
        """Look up by numeric id or slug"""
        key = str(category_id)
        return next(
            (c for c in self.categories if str(c.id) == key or c.slug == key),
            None,
        )

    def list_products(
        self,
        category: Optional[str] = None,
        query: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> ProductPage:
        """Filter, then paginate"""
        results = list(self.products.values())

        if category:
            results = [p for p in results if p.category == category]

        if query:
            q = query.lower()
            results = [
                p for p in results
                if q in p.name.lower() or q in (p.description or "").lower()
            ]

        total = len(results)
        pages = max(1, -(-total // limit))
        start = (page - 1) * limit
        return ProductPage(
            products=results[start:start + limit],
            total=total,
            page=page,
            pages=pages,
        )

    def update_stock(self, product_id: Identifier, delta: int) -> bool:
        """Adjust stock; refuses to go below zero"""
        product = self.get_product(product_id)
        if not product or product.stock + delta < 0:
            return False
        product.stock += delta
        return True
