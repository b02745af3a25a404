"""
Book API Routes

CRUD operations for the catalog service: create, read, update, delete.
"""

from fastapi import APIRouter, Depends, Response, status
from loguru import logger

from bookstore.api.dependencies import get_book_repository
from bookstore.api.schemas import (
    BookCreate,
    BookResponse,
    BookUpdate,
    ErrorResponse,
)
from bookstore.exceptions import InvalidInputError, NotFoundError


router = APIRouter(prefix="/livres", tags=["livres"])


@router.get(
    "",
    response_model=list[BookResponse],
)
def list_books(repo = Depends(get_book_repository)):
    """List every book in the catalog."""
    books = repo.list_all()
    logger.info(f"Listing books: {len(books)} found")
    return books


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
def get_book(
    book_id: int,
    repo = Depends(get_book_repository),
):
    """Get a book by ID."""
    logger.info(f"Fetching book: {book_id}")

    book = repo.get(book_id)
    if not book:
        raise NotFoundError("Book", book_id)
    return book


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing title or author"},
    },
)
def create_book(
    book: BookCreate,
    repo = Depends(get_book_repository),
):
    """Create a new book. Title and author are required, year is optional."""
    logger.info(f"Creating book: {book.title} by {book.author}")

    created = repo.create(title=book.title, author=book.author, year=book.year)

    logger.info(f"Book created: {created.id}")
    return created


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No field to update"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
def update_book(
    book_id: int,
    book: BookUpdate,
    repo = Depends(get_book_repository),
):
    """
    Update a book.

    Supports partial updates - only provided fields are modified.
    """
    logger.info(f"Updating book: {book_id}")

    if repo.get(book_id) is None:
        raise NotFoundError("Book", book_id)

    changes = book.changes()
    if not changes:
        raise InvalidInputError(
            "At least one field (title, author, year) must be provided",
        )

    updated = repo.update(book_id, **changes)
    if updated is None:
        # Deleted between the existence check and the write
        raise NotFoundError("Book", book_id)

    logger.info(f"Book {book_id} updated: {sorted(changes)}")
    return updated


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
def delete_book(
    book_id: int,
    repo = Depends(get_book_repository),
):
    """
    Delete a book.

    Orders that reference it are not touched.
    """
    logger.info(f"Deleting book: {book_id}")

    if not repo.delete(book_id):
        raise NotFoundError("Book", book_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
