"""Mock storefront backend serving every endpoint the client consumes"""

from .main import create_app

__all__ = ["create_app"]
