"""
Ordering Module

Order creation and enrichment across the account and catalog services.
"""

from bookstore.ordering.service import (
    OrderService,
    OrderDetails,
    UNKNOWN_USER,
    UNKNOWN_BOOK,
)

__all__ = [
    "OrderService",
    "OrderDetails",
    "UNKNOWN_USER",
    "UNKNOWN_BOOK",
]
