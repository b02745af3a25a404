"""
Order API Routes

Order creation (validated against the account and catalog services)
and enriched reads.
"""

from fastapi import APIRouter, Depends, status
from loguru import logger

from bookstore.api.dependencies import get_order_service
from bookstore.api.schemas import (
    ErrorResponse,
    OrderCreate,
    OrderDetailsResponse,
    OrderResponse,
)

router = APIRouter(prefix="/commandes", tags=["commandes"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing userId or bookId"},
        404: {"model": ErrorResponse, "description": "User or book not found"},
        500: {"model": ErrorResponse, "description": "Dependency or database error"},
    },
)
async def create_order(
    order: OrderCreate,
    service = Depends(get_order_service),
):
    """
    Create an order.

    The user is verified first, then the book; nothing is stored unless
    both exist.
    """
    created = await service.create_order(order.user_id, order.book_id)
    return created


@router.get(
    "",
    response_model=list[OrderDetailsResponse],
)
async def list_orders(service = Depends(get_order_service)):
    """List all orders with user name and book title."""
    details = await service.list_orders()
    logger.info(f"Listing orders: {len(details)} found")
    return [d.to_dict() for d in details]


@router.get(
    "/{order_id}",
    response_model=OrderDetailsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid order ID"},
        404: {"model": ErrorResponse, "description": "Order not found"},
    },
)
async def get_order(
    order_id: int,
    service = Depends(get_order_service),
):
    """Get one order with user name and book title."""
    logger.info(f"Fetching order: {order_id}")

    details = await service.get_order(order_id)
    return details.to_dict()
