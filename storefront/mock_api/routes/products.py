"""Product and category routes for the mock API"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...models.product import Category, Product, ProductPage
from ..database import ProductDatabase
from ..deps import get_product_db

router = APIRouter(prefix="/api/products", tags=["Products"])
categories_router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=ProductPage)
async def list_products(
    category: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """List products, optionally filtered by category slug"""
    return product_db.list_products(category=category, page=page, limit=limit)


@router.get("/search", response_model=ProductPage)
async def search_products(
    q: str = Query(min_length=1),
    category: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Search product names and descriptions"""
    return product_db.list_products(category=category, query=q, page=page, limit=limit)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Get product details"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@categories_router.get("", response_model=list[Category])
async def list_categories(product_db: ProductDatabase = Depends(get_product_db)):
    return product_db.categories


@categories_router.get("/{category_id}/products", response_model=ProductPage)
async def list_category_products(
    category_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Products in a category, addressed by id or slug"""
    category = product_db.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return product_db.list_products(category=category.slug, page=page, limit=limit)
