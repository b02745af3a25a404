"""
Order Service

Cross-service orchestration for orders.

Creation is a strict, short-circuiting pipeline: the user is checked
against the account service, then the book against the catalog
service, and only then is the order written. Reads are the opposite:
the stored order is authoritative and the user name / book title are
best-effort decorations fetched concurrently, falling back to fixed
placeholders when a peer cannot answer.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from bookstore.clients.peers import (
    AccountServiceClient,
    CatalogServiceClient,
    fetch_with_default,
)
from bookstore.exceptions import (
    DependencyError,
    NotFoundError,
    PeerError,
    PeerNotFoundError,
)
from bookstore.storage.order_repository import OrderRepository, StoredOrder

UNKNOWN_USER = "Utilisateur inconnu"
UNKNOWN_BOOK = "Livre inconnu"


@dataclass
class OrderDetails:
    """An order plus the display fields borrowed from peer services."""

    order: StoredOrder
    user_name: str
    book_title: str

    def to_dict(self) -> dict:
        data = self.order.to_dict()
        data["user_name"] = self.user_name
        data["book_title"] = self.book_title
        return data


def _display_field(payload: Optional[dict[str, Any]], key: str, default: str) -> str:
    """Pull a non-empty string out of a peer payload, or fall back."""
    if not payload:
        return default
    value = payload.get(key)
    if isinstance(value, str) and value:
        return value
    return default


class OrderService:
    """Creates and reads orders on behalf of the order API."""

    def __init__(
        self,
        repository: OrderRepository,
        accounts: AccountServiceClient,
        catalog: CatalogServiceClient,
    ):
        self.repository = repository
        self.accounts = accounts
        self.catalog = catalog

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    async def create_order(self, user_id: int, book_id: int) -> StoredOrder:
        """
        Validate both references, then persist the order.

        Args:
            user_id: ID in the account service
            book_id: ID in the catalog service

        Returns:
            The stored order

        Raises:
            NotFoundError: the user or the book does not exist.
            DependencyError: a peer could not be reached or answered badly.
        """
        logger.info(f"Creating order: user={user_id} book={book_id}")

        for step in self._creation_steps(user_id, book_id):
            await step()

        order = await asyncio.to_thread(self.repository.create, user_id, book_id)

        logger.info(f"Order created: {order.id} (user={user_id} book={book_id})")
        return order

    def _creation_steps(
        self, user_id: int, book_id: int
    ) -> list[Callable[[], Awaitable[None]]]:
        """Validation steps, in the order they must run."""
        return [
            lambda: self._check_user(user_id),
            lambda: self._check_book(book_id),
        ]

    async def _check_user(self, user_id: int) -> None:
        try:
            await self.accounts.get_user(user_id)
        except PeerNotFoundError:
            logger.warning(f"Order rejected: user {user_id} not found")
            raise NotFoundError("User", user_id)
        except PeerError as e:
            logger.error(f"Order rejected: could not verify user {user_id}: {e.reason}")
            raise DependencyError(self.accounts.service_name, e.reason) from e

        logger.debug(f"User {user_id} verified")

    async def _check_book(self, book_id: int) -> None:
        try:
            await self.catalog.get_book(book_id)
        except PeerNotFoundError:
            logger.warning(f"Order rejected: book {book_id} not found")
            raise NotFoundError("Book", book_id)
        except PeerError as e:
            logger.error(f"Order rejected: could not verify book {book_id}: {e.reason}")
            raise DependencyError(self.catalog.service_name, e.reason) from e

        logger.debug(f"Book {book_id} verified")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_order(self, order_id: int) -> OrderDetails:
        """Fetch one order and enrich it."""
        order = await asyncio.to_thread(self.repository.get, order_id)
        if order is None:
            logger.warning(f"Order {order_id} not found")
            raise NotFoundError("Order", order_id)
        return await self._enrich(order)

    async def list_orders(self) -> list[OrderDetails]:
        """Fetch every order and enrich them all concurrently, keeping store order."""
        orders = await asyncio.to_thread(self.repository.list_all)
        return list(await asyncio.gather(*(self._enrich(order) for order in orders)))

    async def _enrich(self, order: StoredOrder) -> OrderDetails:
        user, book = await asyncio.gather(
            fetch_with_default(
                self.accounts.get_user(order.user_id),
                None,
                f"Order {order.id}: user {order.user_id} lookup",
            ),
            fetch_with_default(
                self.catalog.get_book(order.book_id),
                None,
                f"Order {order.id}: book {order.book_id} lookup",
            ),
        )

        return OrderDetails(
            order=order,
            user_name=_display_field(user, "name", UNKNOWN_USER),
            book_title=_display_field(book, "title", UNKNOWN_BOOK),
        )
