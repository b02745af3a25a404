"""
Book Repository

Structured storage for the catalog service's books.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from loguru import logger

from .database import Repository
from .models import BookModel, as_utc


@dataclass
class StoredBook:
    """Data class for book data transfer."""

    id: int
    title: str
    author: str
    year: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model: BookModel) -> "StoredBook":
        """Create from SQLAlchemy model."""
        return cls(
            id=model.id,
            title=model.title,
            author=model.author,
            year=model.year,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )


class BookRepository(Repository):
    """
    Repository for book CRUD operations.

    Usage:
        repo = BookRepository("sqlite:///./livres.sqlite")

        book = repo.create(title="Dune", author="Frank Herbert", year=1965)
        repo.update(book.id, year=1966)
    """

    tables = (BookModel.__table__,)

    # Fields a partial update may touch
    UPDATABLE_FIELDS = ("title", "author", "year")

    def create(
        self,
        title: str,
        author: str,
        year: Optional[int] = None,
    ) -> StoredBook:
        """
        Create a new book.

        Args:
            title: Book title
            author: Author name
            year: Publication year

        Returns:
            Created StoredBook
        """
        with self.get_session() as session:
            book = BookModel(title=title, author=author, year=year)
            session.add(book)
            session.commit()
            session.refresh(book)

            logger.debug(f"Stored book {book.id}")
            return StoredBook.from_model(book)

    def get(self, book_id: int) -> Optional[StoredBook]:
        """
        Get book by ID.

        Args:
            book_id: Book ID

        Returns:
            StoredBook or None
        """
        with self.get_session() as session:
            book = session.get(BookModel, book_id)
            if book:
                return StoredBook.from_model(book)
            return None

    def list_all(self) -> list[StoredBook]:
        """All books in insertion order."""
        with self.get_session() as session:
            books = session.query(BookModel).order_by(BookModel.id.asc()).all()
            return [StoredBook.from_model(b) for b in books]

    def update(self, book_id: int, **updates) -> Optional[StoredBook]:
        """
        Update book fields.

        Only keys in ``UPDATABLE_FIELDS`` are applied.

        Args:
            book_id: Book ID
            **updates: Fields to update

        Returns:
            Updated StoredBook or None
        """
        with self.get_session() as session:
            book = session.get(BookModel, book_id)
            if not book:
                return None

            for key, value in updates.items():
                if key in self.UPDATABLE_FIELDS:
                    setattr(book, key, value)

            session.commit()
            session.refresh(book)

            return StoredBook.from_model(book)

    def delete(self, book_id: int) -> bool:
        """
        Delete a book.

        Orders referencing it are left alone.

        Returns:
            True if deleted
        """
        with self.get_session() as session:
            book = session.get(BookModel, book_id)
            if not book:
                return False

            session.delete(book)
            session.commit()
            return True
