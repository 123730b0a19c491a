"""
Mock Storefront API

An in-memory stand-in for the storefront backend: products, categories,
orders with tracking, and JWT auth. Used for demos and end-to-end tests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.config import get_settings
from ..core.log import configure_logging
from .database import OrderDatabase, ProductDatabase, UserDatabase
from .routes import auth_router, categories_router, orders_router, products_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Storefront API starting up...")
    logger.info(f"Catalog: {len(app.state.product_db.products)} products")
    yield
    logger.info("Mock Storefront API shutting down...")


def create_app() -> FastAPI:
    """Build an app with fresh in-memory databases"""
    app = FastAPI(
        title="Mock Storefront API",
        description="Simulated storefront backend for the cart and checkout client",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.product_db = ProductDatabase()
    app.state.order_db = OrderDatabase()
    app.state.user_db = UserDatabase()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(orders_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "mock-storefront-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    configure_logging(settings, default_level=logging.INFO)
    uvicorn.run(
        "storefront.mock_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
