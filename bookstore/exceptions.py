"""
Bookstore exceptions.

Every error a service reports to its clients is a ``BookstoreError``
carrying the HTTP status and machine-readable code used in the error
envelope. Peer-call failures have their own small hierarchy so the
order service can tell a clean 404 from everything else.
"""

from typing import Any, Optional


class BookstoreError(Exception):
    """Base exception for bookstore errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        detail: Any = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class NotFoundError(BookstoreError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            detail=f"No {resource.lower()} with identifier '{identifier}' exists",
        )
        self.resource = resource
        self.identifier = identifier


class InvalidInputError(BookstoreError):
    """Missing or malformed input."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            status_code=400,
            detail=detail,
        )


class ConflictError(BookstoreError):
    """Uniqueness violation."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            detail=detail,
        )


class InvalidCredentialsError(BookstoreError):
    """Credential mismatch. Never says which factor was wrong."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class DependencyError(BookstoreError):
    """A peer service call failed for a reason other than a clean 404."""

    def __init__(self, service: str, detail: Optional[str] = None):
        super().__init__(
            message=f"Error while contacting the {service} service",
            code="DEPENDENCY_ERROR",
            status_code=500,
            detail=detail,
        )
        self.service = service


# =============================================================================
# Peer call failures
# =============================================================================

class PeerError(Exception):
    """Base class for outbound call failures."""

    def __init__(self, service: str, path: str, reason: str):
        self.service = service
        self.path = path
        self.reason = reason
        super().__init__(f"{service} {path}: {reason}")


class PeerNotFoundError(PeerError):
    """The peer answered 404."""


class PeerServiceError(PeerError):
    """Timeout, connection failure, unexpected status or malformed payload."""
