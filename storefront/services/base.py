"""Shared fallback policy for API-backed services"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx
from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import ApiError
from ..models.common import Result
from .api_client import StorefrontClient

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ApiService:
    """
    Base for services that read or write through the API.

    Every call resolves to a `Result`:
    - success: the API answered and the payload parsed
    - degraded: canned data, either because mock mode is forced or because
      the transport failed and a fallback exists
    - failed: error status, unparseable payload, or transport failure with
      no fallback allowed
    """

    name = "ApiService"

    def __init__(self, client: StorefrontClient, settings: Settings):
        self.client = client
        self.settings = settings

    def _log(self, message: str) -> None:
        logger.debug(f"[{self.name}] {message}")

    async def _call(
        self,
        action: str,
        fetch: Callable[[], Awaitable[Any]],
        parse: Callable[[Any], T],
        mock: Optional[Callable[[], T]] = None,
        status_messages: Optional[dict[int, str]] = None,
    ) -> Result[T]:
        self._log(action)

        if mock is not None and self.settings.mock_always:
            self._log("Using mock API")
            return Result.degraded(mock(), "Mock API enabled")

        try:
            data = await fetch()
            value = parse(data)
        except httpx.TransportError as e:
            logger.warning(f"[{self.name}] {action} failed: {e!r}")
            if mock is not None and self.settings.mock_on_failure:
                return Result.degraded(mock(), "API unavailable, showing sample data")
            return Result.failed("API unavailable")
        except ApiError as e:
            logger.warning(f"[{self.name}] {action} rejected: {e}")
            return Result.failed((status_messages or {}).get(e.status_code, e.message))
        except (ValidationError, ValueError) as e:
            logger.error(f"[{self.name}] {action} returned an unexpected payload: {e}")
            return Result.failed("Unexpected response from server")

        self._log(f"{action} succeeded")
        return Result.success(value)
