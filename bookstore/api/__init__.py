"""
Bookstore - FastAPI Backend.

One application factory per service, all sharing middleware, error
envelope and dependency wiring.
"""

from .main import (
    create_app,
    create_catalog_app,
    create_accounts_app,
    create_orders_app,
    catalog_app,
    accounts_app,
    orders_app,
    main,
)
from .dependencies import (
    Settings,
    get_settings,
    get_service_container,
    ServiceContainer,
)
from .schemas import (
    BookCreate,
    BookUpdate,
    BookResponse,
    UserCreate,
    UserResponse,
    LoginRequest,
    LoginResponse,
    OrderCreate,
    OrderResponse,
    OrderDetailsResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Application
    "create_app",
    "create_catalog_app",
    "create_accounts_app",
    "create_orders_app",
    "catalog_app",
    "accounts_app",
    "orders_app",
    "main",
    # Dependencies
    "Settings",
    "get_settings",
    "get_service_container",
    "ServiceContainer",
    # Schemas
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "LoginResponse",
    "OrderCreate",
    "OrderResponse",
    "OrderDetailsResponse",
    "HealthResponse",
    "ErrorResponse",
]
