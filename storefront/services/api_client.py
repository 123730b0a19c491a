"""
Storefront API Client

HTTP client for the storefront REST API.
Attaches a bearer token to every request when one is available.
"""

import json
import logging
from typing import Any, Callable, Optional

import httpx

from ..core.config import Settings
from ..core.errors import ApiError
from ..models.common import Identifier

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    Thin async wrapper around the storefront endpoints.

    Transport problems surface as `httpx.TransportError`; error statuses as
    `ApiError`. Deciding what to do about either is left to the services.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:5000/api
            timeout: Request timeout in seconds
            token_provider: Callable returning the current bearer token
            transport: Optional httpx transport (tests, ASGI apps)
        """
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "StorefrontClient":
        return cls(
            base_url=settings.api_url,
            timeout=settings.api_timeout,
            token_provider=token_provider,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _generate_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        logger.debug(f"Token available: {bool(token)}")
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"
        body_str = json.dumps(body) if body is not None else None

        response = await self._http_client.request(
            method=method,
            url=url,
            headers=self._generate_headers(),
            content=body_str,
            params={k: v for k, v in (params or {}).items() if v is not None},
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {method} {path} {response.status_code} - {response.text}")
            payload = self._error_payload(response)
            raise ApiError(response.status_code, self._error_message(response, payload), payload)

        return response.json()

    @staticmethod
    def _error_payload(response: httpx.Response) -> dict:
        """Decoded error body; plain-text bodies are kept under the text key"""
        try:
            data = response.json()
        except ValueError:
            return {"text": response.text} if response.text else {}
        return data if isinstance(data, dict) else {"data": data}

    @staticmethod
    def _error_message(response: httpx.Response, payload: dict) -> str:
        message = payload.get("message") or payload.get("detail") or payload.get("text")
        return str(message) if message else response.reason_phrase

    # ==================== Auth APIs ====================

    async def login(self, email: str, password: str) -> dict:
        return await self._request("POST", "/auth/login", body={"email": email, "password": password})

    async def register(self, payload: dict) -> dict:
        return await self._request("POST", "/auth/register", body=payload)

    async def me(self) -> dict:
        return await self._request("GET", "/auth/me")

    # ==================== Product APIs ====================

    async def get_products(self, **filters: Any) -> dict:
        """List products with optional filters (category, page, limit...)"""
        return await self._request("GET", "/products", params=filters)

    async def get_product(self, product_id: Identifier) -> dict:
        return await self._request("GET", f"/products/{product_id}")

    async def search_products(self, query: str, **filters: Any) -> dict:
        return await self._request("GET", "/products/search", params={"q": query, **filters})

    async def get_categories(self) -> list:
        return await self._request("GET", "/categories")

    async def get_products_by_category(self, category_id: Identifier, **filters: Any) -> dict:
        return await self._request("GET", f"/categories/{category_id}/products", params=filters)

    # ==================== Order APIs ====================

    async def create_order(self, payload: dict) -> dict:
        return await self._request("POST", "/orders", body=payload)

    async def get_order(self, order_id: str) -> dict:
        return await self._request("GET", f"/orders/{order_id}")

    async def get_order_tracking(self, order_id: str) -> dict:
        return await self._request("GET", f"/orders/{order_id}/tracking")

    async def get_user_orders(self) -> list:
        return await self._request("GET", "/orders/user")

    async def update_order_status(self, order_id: str, status: str) -> dict:
        """Used by the delivery dashboard; not part of the checkout path"""
        return await self._request("PATCH", f"/orders/{order_id}/status", body={"status": status})
