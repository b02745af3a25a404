"""
Error Handling for the bookstore services

Centralized error handling:
- One structured error envelope for every non-2xx response
- Logging of errors
- Exception translation
"""

import traceback
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.exceptions import BookstoreError

from .logging import get_request_id


def create_error_response(
    error: str,
    code: str,
    status_code: int,
    detail: Any = None,
    headers: dict = None,
) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "detail": jsonable_encoder(detail),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        headers=headers,
    )


def _summarize_validation_errors(errors: list[dict]) -> list[dict]:
    """Keep location and message; drop echoed input (may hold a password)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in errors
    ]


def _describe(request: Request) -> str:
    """Method, path and correlation ID, for log lines."""
    return f"{request.method} {request.url.path} [request_id={get_request_id() or '-'}]"


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(BookstoreError)
    async def bookstore_exception_handler(request: Request, exc: BookstoreError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{_describe(request)}: {exc.code} - {exc.message} ({exc.detail})")
        return create_error_response(
            error=exc.message,
            code=exc.code,
            status_code=exc.status_code,
            detail=exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        detail = _summarize_validation_errors(exc.errors())
        logger.warning(f"{_describe(request)}: invalid input {detail}")
        return create_error_response(
            error="Invalid input",
            code="INVALID_INPUT",
            status_code=400,
            detail=detail,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"{_describe(request)}: database error: {type(exc).__name__}: {exc}"
        )
        return create_error_response(
            error="Database error",
            code="DATABASE_ERROR",
            status_code=500,
            detail="The datastore could not complete the operation",
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"{_describe(request)}: HTTP {exc.status_code}")
        return create_error_response(
            error=str(exc.detail),
            code="HTTP_ERROR",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {_describe(request)}: "
            f"{type(exc).__name__}: {str(exc)}\n{traceback.format_exc()}"
        )
        # Don't expose internal error details
        return create_error_response(
            error="Internal Server Error",
            code="INTERNAL_ERROR",
            status_code=500,
            detail="An unexpected error occurred",
        )
