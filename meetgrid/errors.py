"""Standardized error handling for the scheduling API.

This module provides:
1. The API error hierarchy, including the grid engine's domain errors
2. Exception handlers for FastAPI
3. The standard error response model

Usage:
    from meetgrid.errors import NotFoundError, KeyResolutionError

    # In controllers:
    if not event:
        raise NotFoundError(detail="Event not found", event_id=event_id)

    # Register handlers in main.py:
    from meetgrid.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    detail: str | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None


class APIError(Exception):
    """Base class for API errors."""

    status_code: int = 500
    error: str = "internal_error"
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: str | None = None,
        error_code: str | None = None,
        **context: Any,
    ) -> None:
        self.detail = detail or self.__class__.detail
        self.error_code = error_code
        self.context = context if context else None
        super().__init__(self.detail)

    def to_response(self) -> ErrorResponse:
        """Convert exception to error response model."""
        return ErrorResponse(
            error=self.error,
            detail=self.detail,
            error_code=self.error_code,
            context=self.context,
        )


class NotFoundError(APIError):
    """Resource not found error (404)."""

    status_code = 404
    error = "not_found"
    detail = "Resource not found"


class BadRequestError(APIError):
    """Bad request error (400)."""

    status_code = 400
    error = "bad_request"
    detail = "Invalid request"


class ConflictError(APIError):
    """Request conflicts with the current state (409)."""

    status_code = 409
    error = "conflict"
    detail = "Request conflicts with current state"


class ServiceUnavailableError(APIError):
    """Service unavailable error (503)."""

    status_code = 503
    error = "service_unavailable"
    detail = "Service temporarily unavailable"


class DatabaseError(APIError):
    """Database error (500)."""

    status_code = 500
    error = "database_error"
    detail = "Database operation failed"


class InvalidTimeRangeError(BadRequestError):
    """A time range whose start is not before its end, or a malformed HH:MM value."""

    error = "invalid_time_range"
    detail = "Time range start must be before end"


class KeyResolutionError(BadRequestError):
    """A slot key names a column or time that is not part of the event grid.

    Raised when availability was produced against a stale grid configuration.
    """

    error = "invalid_slot_key"
    detail = "Slot key does not belong to this event"


class InvalidParticipantError(BadRequestError):
    """Participant name is empty or too long."""

    error = "invalid_participant"
    detail = "Participant name is required"


class SchedulingInactiveError(ConflictError):
    """A slot was chosen while scheduling mode is off."""

    error = "scheduling_inactive"
    detail = "Scheduling mode is not active"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    logger.warning(
        "API error: %s (status=%d, path=%s)",
        exc.detail,
        exc.status_code,
        request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPExceptions with the standard format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=_status_to_error_type(exc.status_code),
            detail=str(exc.detail),
        ).model_dump(exclude_none=True),
    )


def _status_to_error_type(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    mapping = {
        400: "bad_request",
        404: "not_found",
        409: "conflict",
        422: "validation_error",
        500: "internal_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
