# Mock API databases

from .products import ProductDatabase
from .orders import InvalidTransition, OrderDatabase
from .users import UserDatabase

__all__ = [
    "ProductDatabase",
    "InvalidTransition",
    "OrderDatabase",
    "UserDatabase",
]
