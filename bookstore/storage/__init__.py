"""
Storage Module for the bookstore services

One repository per service, each bound to its own database:
- Books (catalog service)
- Users (account service)
- Orders (order service)
"""

from bookstore.storage.models import (
    Base,
    BookModel,
    UserModel,
    OrderModel,
    ORDER_STATUS_IN_PROGRESS,
)
from bookstore.storage.database import (
    Repository,
    create_db_engine,
)
from bookstore.storage.book_repository import (
    BookRepository,
    StoredBook,
)
from bookstore.storage.user_repository import (
    UserRepository,
    StoredUser,
    DuplicateEmailError,
)
from bookstore.storage.order_repository import (
    OrderRepository,
    StoredOrder,
)

__all__ = [
    # Models
    "Base",
    "BookModel",
    "UserModel",
    "OrderModel",
    "ORDER_STATUS_IN_PROGRESS",
    # Plumbing
    "Repository",
    "create_db_engine",
    # Repositories
    "BookRepository",
    "StoredBook",
    "UserRepository",
    "StoredUser",
    "DuplicateEmailError",
    "OrderRepository",
    "StoredOrder",
]
