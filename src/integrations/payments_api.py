"""Client for the remote payment links service."""

from functools import lru_cache
from typing import Any, Optional

import httpx
import structlog

from src.config import settings

logger = structlog.get_logger()


class PaymentsAPIClient:
    """Client for the stores/orders/dashboard REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. "http://localhost:5000/api"
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (ASGI app, mock) for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs,
    ) -> Any:
        """Make an API request and return the decoded JSON body."""
        url = f"{self.base_url}/{endpoint}"

        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "payments_api_error",
                status_code=e.response.status_code,
                url=url,
                response=e.response.text[:500],
            )
            raise
        except httpx.RequestError as e:
            logger.error("payments_api_request_error", url=url, error=str(e))
            raise

    async def _request_or_none(self, method: str, endpoint: str, **kwargs) -> Any:
        """Like _request, but a 404 answer becomes None."""
        try:
            return await self._request(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

    # === Stores ===

    async def list_stores(self) -> list[dict[str, Any]]:
        """List stores, newest first."""
        return await self._request("GET", "stores")

    async def get_store(self, store_id: str) -> Optional[dict[str, Any]]:
        """Fetch a store, or None if the service does not know it."""
        return await self._request_or_none("GET", f"stores/{store_id}")

    async def create_store(self, store: dict[str, Any]) -> dict[str, Any]:
        """Create a store."""
        return await self._request("POST", "stores", json=store)

    async def update_store(self, store_id: str, store: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Replace a store; None if it does not exist."""
        return await self._request_or_none("PUT", f"stores/{store_id}", json=store)

    # === Orders ===

    async def list_orders(self, store_id: Optional[str] = None) -> list[dict[str, Any]]:
        """
        List orders, newest first.

        Args:
            store_id: Only orders of this store when given
        """
        params = {"storeId": store_id} if store_id else None
        return await self._request("GET", "orders", params=params)

    async def get_order(self, order_id: str) -> Optional[dict[str, Any]]:
        """Fetch an order, or None if the service does not know it."""
        return await self._request_or_none("GET", f"orders/{order_id}")

    async def save_order(self, order: dict[str, Any]) -> dict[str, Any]:
        """Create or replace an order (matched by id)."""
        return await self._request("POST", "orders", json=order)

    async def update_order_status(self, order_id: str, status: str) -> Optional[dict[str, Any]]:
        """Set an order's status; None if the order does not exist."""
        return await self._request_or_none(
            "PATCH",
            f"orders/{order_id}/status",
            json={"status": status},
        )

    # === Dashboard ===

    async def get_metrics(self, store_id: Optional[str] = None) -> dict[str, Any]:
        """Dashboard metrics, globally or for one store."""
        params = {"storeId": store_id} if store_id else None
        return await self._request("GET", "dashboard/metrics", params=params)


@lru_cache
def get_payments_client() -> PaymentsAPIClient:
    """Get the configured remote client."""
    return PaymentsAPIClient(
        base_url=settings.remote_api_url,
        timeout=settings.remote_timeout,
    )
