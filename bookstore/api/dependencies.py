"""
Dependency injection for FastAPI routes.

Provides injectable dependencies for:
- Configuration
- Repositories (one per service)
- Peer clients and the order service
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx
from fastapi import Depends, Request


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Databases (one per service)
    catalog_database_url: str = "sqlite:///./livres.sqlite"
    accounts_database_url: str = "sqlite:///./utilisateurs.sqlite"
    orders_database_url: str = "sqlite:///./commandes.sqlite"
    database_echo: bool = False

    # Peer services (used by the order service)
    catalog_service_url: str = "http://localhost:3001"
    accounts_service_url: str = "http://localhost:3003"
    peer_timeout_seconds: float = 5.0

    # Password hashing cost
    bcrypt_rounds: int = 10

    # Serving
    host: str = "0.0.0.0"
    catalog_port: int = 3001
    orders_port: int = 3002
    accounts_port: int = 3003

    # Environment
    environment: str = "development"
    debug: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            catalog_database_url=os.getenv("CATALOG_DATABASE_URL", cls.catalog_database_url),
            accounts_database_url=os.getenv("ACCOUNTS_DATABASE_URL", cls.accounts_database_url),
            orders_database_url=os.getenv("ORDERS_DATABASE_URL", cls.orders_database_url),
            database_echo=os.getenv("DATABASE_ECHO", "false").lower() == "true",
            catalog_service_url=os.getenv("CATALOG_SERVICE_URL", cls.catalog_service_url),
            accounts_service_url=os.getenv("ACCOUNTS_SERVICE_URL", cls.accounts_service_url),
            peer_timeout_seconds=float(os.getenv("PEER_TIMEOUT_SECONDS", cls.peer_timeout_seconds)),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", cls.bcrypt_rounds)),
            host=os.getenv("HOST", cls.host),
            catalog_port=int(os.getenv("CATALOG_PORT", cls.catalog_port)),
            orders_port=int(os.getenv("ORDERS_PORT", cls.orders_port)),
            accounts_port=int(os.getenv("ACCOUNTS_PORT", cls.accounts_port)),
            environment=os.getenv("BOOKSTORE_ENV", cls.environment),
            debug=os.getenv("DEBUG", "true").lower() == "true",
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()


# =============================================================================
# Service Container (Lazy Loading)
# =============================================================================

class ServiceContainer:
    """
    Container for lazy-loaded service instances.

    Each service process only touches what it needs: the catalog service
    never opens the orders database, and so on. Peer transports can be
    injected for tests.
    """

    def __init__(
        self,
        settings: Settings,
        accounts_transport: Optional[httpx.AsyncBaseTransport] = None,
        catalog_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.accounts_transport = accounts_transport
        self.catalog_transport = catalog_transport
        self._book_repository = None
        self._user_repository = None
        self._order_repository = None
        self._account_client = None
        self._catalog_client = None
        self._order_service = None

    @property
    def book_repository(self):
        """Get book repository instance."""
        if self._book_repository is None:
            from ..storage.book_repository import BookRepository
            self._book_repository = BookRepository(
                self.settings.catalog_database_url,
                echo=self.settings.database_echo,
            )
        return self._book_repository

    @property
    def user_repository(self):
        """Get user repository instance."""
        if self._user_repository is None:
            from ..storage.user_repository import UserRepository
            self._user_repository = UserRepository(
                self.settings.accounts_database_url,
                echo=self.settings.database_echo,
            )
        return self._user_repository

    @property
    def order_repository(self):
        """Get order repository instance."""
        if self._order_repository is None:
            from ..storage.order_repository import OrderRepository
            self._order_repository = OrderRepository(
                self.settings.orders_database_url,
                echo=self.settings.database_echo,
            )
        return self._order_repository

    @property
    def account_client(self):
        """Get account service client."""
        if self._account_client is None:
            from ..clients.peers import AccountServiceClient
            self._account_client = AccountServiceClient(
                self.settings.accounts_service_url,
                timeout=self.settings.peer_timeout_seconds,
                transport=self.accounts_transport,
            )
        return self._account_client

    @property
    def catalog_client(self):
        """Get catalog service client."""
        if self._catalog_client is None:
            from ..clients.peers import CatalogServiceClient
            self._catalog_client = CatalogServiceClient(
                self.settings.catalog_service_url,
                timeout=self.settings.peer_timeout_seconds,
                transport=self.catalog_transport,
            )
        return self._catalog_client

    @property
    def order_service(self):
        """Get order orchestration service."""
        if self._order_service is None:
            from ..ordering.service import OrderService
            self._order_service = OrderService(
                repository=self.order_repository,
                accounts=self.account_client,
                catalog=self.catalog_client,
            )
        return self._order_service

    async def close(self) -> None:
        """Release clients and database connections that were opened."""
        if self._account_client is not None:
            await self._account_client.close()
        if self._catalog_client is not None:
            await self._catalog_client.close()
        for repository in (self._book_repository, self._user_repository, self._order_repository):
            if repository is not None:
                repository.dispose()


def get_service_container(request: Request) -> ServiceContainer:
    """Get the service container of the application serving this request."""
    return request.app.state.container


# =============================================================================
# Individual Service Dependencies
# =============================================================================

def get_book_repository(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for book repository."""
    return container.book_repository


def get_user_repository(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for user repository."""
    return container.user_repository


def get_order_service(
    container: ServiceContainer = Depends(get_service_container),
):
    """Dependency for order service."""
    return container.order_service


def get_app_settings(
    container: ServiceContainer = Depends(get_service_container),
) -> Settings:
    """Settings the current application was built with."""
    return container.settings
