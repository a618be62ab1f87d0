"""Centralized error handling system with proper categorization.

This module provides:
1. Error categories and codes for each kind of failure
2. Consistent ``{"error": message, ...}`` response bodies
3. Logging of request context for unexpected failures
"""

import logging
from typing import Any
from uuid import UUID, uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnhub.exceptions import (
    ForbiddenError,
    MalformedInputError,
    ResourceNotFoundError,
    ValidationError,
)
from learnhub.storage import StorageError


logger = logging.getLogger(__name__)


# === Error Categories ===


class ErrorCategory:
    """Error category constants."""

    VALIDATION = "VALIDATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    STORAGE = "STORAGE_ERROR"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode:
    """Specific error codes for better client handling."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"

    # Authorization errors
    FORBIDDEN = "FORBIDDEN"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"

    # Storage errors
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # Internal errors
    INTERNAL = "INTERNAL_ERROR"


# === Error Response Formatting ===


def format_error_response(
    category: str,
    code: str,
    detail: str,
    status_code: int,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    """Format a consistent error response."""
    content: dict[str, Any] = {
        "error": detail,
        "category": category,
        "code": code,
    }

    if metadata:
        content["metadata"] = metadata

    return JSONResponse(status_code=status_code, content=content)


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Handle validation errors from FastAPI request parsing and custom validators."""
    logger.info(f"Validation error on {request.method} {request.url.path}: {exc}")

    if isinstance(exc, RequestValidationError):
        errors = []
        for error in exc.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({"field": field, "message": error["msg"], "type": error["type"]})

        return format_error_response(
            category=ErrorCategory.VALIDATION,
            code=ErrorCode.INVALID_INPUT,
            detail="Invalid input data",
            status_code=status.HTTP_400_BAD_REQUEST,
            metadata={"errors": errors},
        )

    code = ErrorCode.INVALID_FORMAT if isinstance(exc, MalformedInputError) else ErrorCode.INVALID_INPUT
    return format_error_response(
        category=ErrorCategory.VALIDATION,
        code=code,
        detail=str(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_not_found_errors(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    """Handle references to missing resources."""
    logger.info(f"Not found on {request.method} {request.url.path}: {exc}")
    return format_error_response(
        category=ErrorCategory.RESOURCE_NOT_FOUND,
        code=ErrorCode.NOT_FOUND,
        detail=str(exc),
        status_code=status.HTTP_404_NOT_FOUND,
    )


async def handle_authorization_errors(request: Request, exc: ForbiddenError) -> JSONResponse:
    """Handle missing or wrong role claims."""
    logger.warning(f"Forbidden {request.method} {request.url.path} from {_client_host(request)}")
    return format_error_response(
        category=ErrorCategory.AUTHORIZATION,
        code=ErrorCode.FORBIDDEN,
        detail=str(exc),
        status_code=status.HTTP_403_FORBIDDEN,
    )


async def handle_storage_errors(request: Request, exc: StorageError) -> JSONResponse:
    """Handle persistence failures."""
    logger.error(
        f"Storage error on {request.method} {request.url.path}: {exc}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return format_error_response(
        category=ErrorCategory.STORAGE,
        code=ErrorCode.STORAGE_WRITE_FAILED,
        detail="Failed to persist changes",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_http_errors(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle routing errors; unknown routes and methods both answer 404."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return format_error_response(
            category=ErrorCategory.RESOURCE_NOT_FOUND,
            code=ErrorCode.NOT_FOUND,
            detail="Not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return format_error_response(
        category=ErrorCategory.INTERNAL if exc.status_code >= 500 else ErrorCategory.VALIDATION,
        code=ErrorCode.INTERNAL if exc.status_code >= 500 else ErrorCode.INVALID_INPUT,
        detail=str(exc.detail),
        status_code=exc.status_code,
    )


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    error_id = uuid4()
    log_error_context(request, exc, error_id)

    return format_error_response(
        category=ErrorCategory.INTERNAL,
        code=ErrorCode.INTERNAL,
        detail="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        metadata={"error_id": str(error_id)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(RequestValidationError, handle_validation_errors)
    app.add_exception_handler(ValidationError, handle_validation_errors)
    app.add_exception_handler(MalformedInputError, handle_validation_errors)
    app.add_exception_handler(ResourceNotFoundError, handle_not_found_errors)
    app.add_exception_handler(ForbiddenError, handle_authorization_errors)
    app.add_exception_handler(StorageError, handle_storage_errors)
    app.add_exception_handler(StarletteHTTPException, handle_http_errors)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, handle_unexpected_errors)


# === Utility Functions ===


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log comprehensive error context for debugging."""
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": _client_host(request),
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    # Add request headers (excluding sensitive ones)
    safe_headers = {
        k: v for k, v in request.headers.items() if k.lower() not in ["authorization", "cookie", "x-api-key"]
    }
    context["headers"] = safe_headers

    logger.error("Request failed", extra=context, exc_info=exc)
