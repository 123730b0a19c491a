"""
Storefront client

Cart, checkout and order handling for a REST storefront, with canned
fallbacks so the flow keeps working without a backend.
"""

from .app import Storefront

__version__ = "1.0.0"

__all__ = ["Storefront", "__version__"]
