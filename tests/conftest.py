"""
Pytest configuration and fixtures for the bookstore service tests.
"""

import sys
from pathlib import Path
from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookstore.api.main import (
    create_accounts_app,
    create_catalog_app,
    create_orders_app,
)
from bookstore.api.dependencies import Settings


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings(data_dir: Path) -> Settings:
    """Return settings configured for testing: throwaway databases, cheap hashing."""
    return Settings(
        catalog_database_url=f"sqlite:///{data_dir / 'livres.sqlite'}",
        accounts_database_url=f"sqlite:///{data_dir / 'utilisateurs.sqlite'}",
        orders_database_url=f"sqlite:///{data_dir / 'commandes.sqlite'}",
        database_echo=False,
        catalog_service_url="http://catalog.test",
        accounts_service_url="http://accounts.test",
        peer_timeout_seconds=1.0,
        bcrypt_rounds=4,
        environment="development",
        debug=True,
    )


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return get_test_settings(tmp_path)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def catalog_app(test_settings):
    """Catalog service application."""
    application = create_catalog_app(test_settings)
    yield application
    await application.state.container.close()


@pytest_asyncio.fixture(scope="function")
async def accounts_app(test_settings):
    """Account service application."""
    application = create_accounts_app(test_settings)
    yield application
    await application.state.container.close()


@pytest_asyncio.fixture(scope="function")
async def orders_app(test_settings, catalog_app, accounts_app):
    """Order service application wired in-process to the other two services."""
    application = create_orders_app(
        test_settings,
        accounts_transport=ASGITransport(app=accounts_app),
        catalog_transport=ASGITransport(app=catalog_app),
    )
    yield application
    await application.state.container.close()


@pytest_asyncio.fixture(scope="function")
async def catalog_client(catalog_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for the catalog service."""
    transport = ASGITransport(app=catalog_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def accounts_client(accounts_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for the account service."""
    transport = ASGITransport(app=accounts_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def orders_client(orders_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for the order service."""
    transport = ASGITransport(app=orders_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Peer Mocks
# =============================================================================

class RecordingHandler:
    """
    ``httpx.MockTransport`` handler that answers from a route table and
    records every request it sees.

    Routes map a path to a response, a ``(status, json)`` pair, or an
    exception instance to raise. Unknown paths answer 404.
    """

    def __init__(self, routes: dict = None):
        self.routes = dict(routes or {})
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        outcome = self.routes.get(request.url.path)
        if outcome is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        status_code, payload = outcome
        return httpx.Response(status_code, json=payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def recording_handler() -> Callable[..., RecordingHandler]:
    """Factory for recording peer handlers."""
    return RecordingHandler


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def sample_book_data() -> dict:
    """Sample book data for testing."""
    return {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "year": 1925,
    }


@pytest.fixture
def sample_books_batch() -> list[dict]:
    """Multiple sample books for batch testing."""
    return [
        {"title": "1984", "author": "George Orwell", "year": 1949},
        {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
        {"title": "Pride and Prejudice", "author": "Jane Austen"},
    ]


@pytest.fixture
def sample_user_data() -> dict:
    """Sample registration payload."""
    return {
        "email": "alice@example.com",
        "password": "correct horse battery staple",
        "name": "Alice",
    }
