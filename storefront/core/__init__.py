# Core modules

from .config import MockMode, Settings, get_settings, settings
from .errors import ApiError, StorageError, StorefrontError
from .session import AuthSession, require_role
from .storage import FileStorage, KeyValueStorage, MemoryStorage, create_storage

__all__ = [
    "MockMode",
    "Settings",
    "get_settings",
    "settings",
    "ApiError",
    "StorageError",
    "StorefrontError",
    "AuthSession",
    "require_role",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "create_storage",
]
