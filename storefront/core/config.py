"""Storefront Configuration"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class MockMode(str, Enum):
    """How service calls fall back to canned data"""
    OFF = "off"            # never mock; transport errors surface as failures
    FALLBACK = "fallback"  # mock only when the transport fails
    ALWAYS = "always"      # never touch the network


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API
    api_url: str = "http://localhost:5000/api"
    api_timeout: float = 10.0
    mock_api: MockMode = MockMode.FALLBACK
    enable_logging: bool = False

    # Local persistence
    storage_path: Optional[str] = None
    cart_storage_key: str = "cart"

    # Mock backend
    host: str = "0.0.0.0"
    port: int = 5000
    jwt_secret: str = "storefront-dev-secret"
    jwt_ttl_hours: int = 24

    @property
    def mock_always(self) -> bool:
        return self.mock_api == MockMode.ALWAYS

    @property
    def mock_on_failure(self) -> bool:
        """Whether a transport failure may be answered with canned data"""
        return self.mock_api != MockMode.OFF


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
