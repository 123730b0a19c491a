"""Request-scoped access to the app's in-memory databases"""

from fastapi import Request

from .database import OrderDatabase, ProductDatabase, UserDatabase


def get_product_db(request: Request) -> ProductDatabase:
    return request.app.state.product_db


def get_order_db(request: Request) -> OrderDatabase:
    return request.app.state.order_db


def get_user_db(request: Request) -> UserDatabase:
    return request.app.state.user_db
