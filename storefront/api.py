"""
Storefront API client.

Thin async wrapper over httpx for the three remote calls the storefront
makes: product listing, order submission, contact submission. Callers
only rely on the success/failure distinction, not on response bodies.
"""
from typing import Any, Dict, List, Optional

import httpx

from storefront.config import STOREFRONT_API_TIMEOUT, STOREFRONT_API_URL
from storefront.errors import ERROR_NETWORK, ERROR_SERVER_STATUS, ERROR_UNEXPECTED
from storefront.logging import get_logger

logger = get_logger(__name__)


class StorefrontAPI:
    """
    Remote order/contact/catalog service.

    Usage:
        async with StorefrontAPI() as api:
            products = await api.get_products()
            await api.submit_order(payload)
    """

    def __init__(
        self,
        base_url: str = STOREFRONT_API_URL,
        timeout: float = STOREFRONT_API_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "StorefrontAPI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_products(self) -> List[Dict[str, Any]]:
        """
        Fetch the ordered product list.

        Raises:
            httpx.HTTPError: On transport failure or error status
        """
        response = await self._client.get("/products")
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            logger.warning(f"Unexpected products payload type: {type(data).__name__}")
            return []
        return data

    async def submit_order(self, payload: Dict[str, Any]) -> httpx.Response:
        """POST an order. Error statuses raise httpx.HTTPStatusError."""
        response = await self._client.post("/order", json=payload)
        response.raise_for_status()
        return response

    async def submit_contact(self, payload: Dict[str, Any]) -> httpx.Response:
        """POST a contact message. Error statuses raise httpx.HTTPStatusError."""
        response = await self._client.post("/contact", json=payload)
        response.raise_for_status()
        return response


def describe_submission_error(error: BaseException) -> str:
    """
    Map a failed remote call to the message shown to the user.

    Args:
        error: Exception raised by the submission

    Returns:
        Server, network, or unexpected-error message
    """
    if isinstance(error, httpx.HTTPStatusError):
        return ERROR_SERVER_STATUS.format(status=error.response.status_code)
    if isinstance(error, httpx.RequestError):
        return ERROR_NETWORK
    return ERROR_UNEXPECTED
