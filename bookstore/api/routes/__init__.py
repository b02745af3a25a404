"""
API Routes for the bookstore services

Route modules:
- books: catalog service (book CRUD)
- users: account service (registration, login, lookup)
- orders: order service (creation, enriched reads)
"""

from bookstore.api.routes.books import router as books_router
from bookstore.api.routes.users import router as users_router
from bookstore.api.routes.orders import router as orders_router

__all__ = [
    "books_router",
    "users_router",
    "orders_router",
]
