"""
Peer Service Clients

HTTP clients the order service uses to reach the account and catalog
services. Every call is bounded by a timeout and every failure is
classified as either a clean 404 (``PeerNotFoundError``) or anything
else (``PeerServiceError``).
"""

from typing import Any, Awaitable, Optional, TypeVar, Union

import httpx
from loguru import logger

from bookstore.exceptions import PeerNotFoundError, PeerServiceError

T = TypeVar("T")
D = TypeVar("D")

DEFAULT_TIMEOUT = 5.0


class PeerServiceClient:
    """
    JSON-over-HTTP client for one peer service.

    The underlying ``httpx.AsyncClient`` is created on first use and
    reused for connection pooling. Pass ``transport`` to route calls
    somewhere other than the network (an ASGI app, a mock handler).
    """

    service_name = "peer"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def get_json(self, path: str) -> dict[str, Any]:
        """
        GET ``path`` and return the decoded JSON object.

        Raises:
            PeerNotFoundError: the peer answered 404.
            PeerServiceError: timeout, transport error, any other non-2xx
                status, or a body that is not a JSON object.
        """
        client = await self._get_client()

        try:
            response = await client.get(path)
        except httpx.TimeoutException as e:
            raise PeerServiceError(self.service_name, path, f"timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise PeerServiceError(self.service_name, path, f"{type(e).__name__}: {e}") from e

        if response.status_code == 404:
            raise PeerNotFoundError(self.service_name, path, "not found")

        if not response.is_success:
            raise PeerServiceError(
                self.service_name, path, f"unexpected status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise PeerServiceError(self.service_name, path, "malformed JSON payload") from e

        if not isinstance(payload, dict):
            raise PeerServiceError(self.service_name, path, "payload is not a JSON object")

        return payload

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


class AccountServiceClient(PeerServiceClient):
    """Client for the account service."""

    service_name = "account"

    async def get_user(self, user_id: int) -> dict[str, Any]:
        """Fetch a user (without password) by ID."""
        return await self.get_json(f"/users/{user_id}")


class CatalogServiceClient(PeerServiceClient):
    """Client for the catalog service."""

    service_name = "catalog"

    async def get_book(self, book_id: int) -> dict[str, Any]:
        """Fetch a book by ID."""
        return await self.get_json(f"/livres/{book_id}")


async def fetch_with_default(
    fetch: Awaitable[T],
    default: D,
    description: str = "fetch",
) -> Union[T, D]:
    """
    Await ``fetch`` and return its result, or ``default`` if it fails.

    Never raises: any failure is logged and replaced by ``default``.
    """
    try:
        return await fetch
    except PeerNotFoundError:
        logger.warning(f"{description}: not found, using default")
    except Exception as e:
        logger.warning(f"{description} failed, using default: {e}")
    return default
