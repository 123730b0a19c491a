"""Storefront exceptions"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront client errors"""
    pass


class StorageError(StorefrontError):
    """Local key-value storage could not be read or written"""
    pass


class ApiError(StorefrontError):
    """The API answered with an error status"""

    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"
