"""
API Schemas for the bookstore services

Pydantic models for request validation and response serialization:
- Book models (catalog service)
- User models (account service)
- Order models (order service)

Design Decisions:
1. camelCase on the wire, snake_case in Python: aliases are generated,
   and requests accept either spelling
2. Separate Request/Response: Clear distinction between inputs and outputs
3. Responses never carry a password field
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


class APIModel(BaseModel):
    """Base model: camelCase aliases, construction from dataclasses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Book Schemas
# =============================================================================

class BookCreate(APIModel):
    """Book creation request."""

    title: str = Field(..., min_length=1, max_length=500)
    author: str = Field(..., min_length=1, max_length=500)
    year: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "The Great Gatsby",
                "author": "F. Scott Fitzgerald",
                "year": 1925,
            }
        }
    )


class BookUpdate(APIModel):
    """Book update request (partial).

    A ``null`` title or author is ignored; a ``null`` year clears it.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = Field(None, min_length=1, max_length=500)
    year: Optional[int] = None

    def changes(self) -> dict[str, Any]:
        """Fields to apply, keyed by attribute name."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in supplied.items()
            if key == "year" or value is not None
        }


class BookResponse(APIModel):
    """Book response model."""

    id: int
    title: str
    author: str
    year: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# User Schemas
# =============================================================================

class UserCreate(APIModel):
    """Registration request."""

    email: EmailStr
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=1, max_length=72)
    name: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "test@example.com",
                "password": "password123",
                "name": "Test User",
            }
        }
    )


class LoginRequest(APIModel):
    """Login request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Normalize like registration does; anything that is not an email is kept as is."""
        try:
            return validate_email(value)[1]
        except PydanticCustomError:
            return value


class UserResponse(APIModel):
    """User as returned to clients; no password."""

    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResponse(APIModel):
    """Successful login."""

    message: str
    user: UserResponse


# =============================================================================
# Order Schemas
# =============================================================================

class OrderCreate(APIModel):
    """Order creation request."""

    user_id: int = Field(..., gt=0)
    book_id: int = Field(..., gt=0)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"userId": 1, "bookId": 2}
        }
    )


class OrderResponse(APIModel):
    """Order as stored."""

    id: int
    user_id: int
    book_id: int
    # French wire name, as existing order clients read it
    order_date: Optional[datetime] = Field(None, alias="dateCommande")
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderDetailsResponse(OrderResponse):
    """Order enriched with peer display fields."""

    user_name: str
    book_title: str


# =============================================================================
# Error Schemas
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: Optional[Any] = None
    code: str
    timestamp: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Book not found",
                "detail": "No book with identifier '12' exists",
                "code": "NOT_FOUND",
                "timestamp": "2025-01-20T12:00:00Z",
            }
        }
    )


# =============================================================================
# Health Check
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str
    version: str
