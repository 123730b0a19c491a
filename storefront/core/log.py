"""Logging setup"""

import logging
from typing import Optional

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    settings: Optional[Settings] = None,
    default_level: int = logging.WARNING,
) -> None:
    """
    Configure root logging.

    The verbose toggle switches everything to DEBUG; otherwise the caller's
    default level applies (WARNING for the client, INFO for the mock API).
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.enable_logging else default_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("storefront").setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
