"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module fournit une gestion centralisée des erreurs avec des enveloppes standardisées, des codes
d'erreur cohérents et un support pour le tracing des requêtes. Les exceptions du domaine sont
traduites ici en réponses HTTP; les routes se contentent de les laisser remonter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from astro_daily.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_UNPROCESSABLE_ENTITY,
)
from astro_daily.domain.errors import (
    ContentConfigurationError,
    ForecastError,
    InvalidInputError,
    UserNotFoundError,
)

log = logging.getLogger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class ErrorCodes:
    """Standard error codes for the API."""

    # Client errors (4xx)
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Business logic errors
    CONTENT_MISCONFIGURED = "CONTENT_MISCONFIGURED"


# Map common HTTP status codes to error codes
HTTP_ERROR_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
}

# Ordre significatif: la première classe correspondante l'emporte
DOMAIN_ERRORS: tuple[tuple[type[ForecastError], int, str], ...] = (
    (InvalidInputError, HTTP_BAD_REQUEST, ErrorCodes.BAD_REQUEST),
    (UserNotFoundError, HTTP_NOT_FOUND, ErrorCodes.NOT_FOUND),
    (ContentConfigurationError, HTTP_INTERNAL_SERVER_ERROR, ErrorCodes.CONTENT_MISCONFIGURED),
)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(
        code=code,
        message=message,
        trace_id=trace_id,
        details=details,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers or request state."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id

    # Set by RequestIDMiddleware
    return getattr(request.state, "trace_id", None)


def handle_forecast_error(request: Request, exc: ForecastError) -> JSONResponse:
    """Handle domain exceptions with standard envelope."""
    trace_id = extract_trace_id(request)
    status_code, code = HTTP_INTERNAL_SERVER_ERROR, ErrorCodes.INTERNAL_ERROR
    for exc_type, mapped_status, mapped_code in DOMAIN_ERRORS:
        if isinstance(exc, exc_type):
            status_code, code = mapped_status, mapped_code
            break

    extra = {
        "code": code,
        "error_message": str(exc),
        "status_code": status_code,
        "trace_id": trace_id,
    }
    if status_code >= HTTP_INTERNAL_SERVER_ERROR:
        log.error("Domain error occurred", extra=extra)
    else:
        log.info("Domain error occurred", extra=extra)

    return create_error_response(
        status_code=status_code,
        code=code,
        message=str(exc),
        trace_id=trace_id,
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    trace_id = extract_trace_id(request)
    code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")

    log.error(
        "HTTP exception occurred",
        extra={
            "code": code,
            "error_message": str(exc.detail),
            "status_code": exc.status_code,
            "trace_id": trace_id,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=trace_id,
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors (422) with standard envelope."""
    trace_id = extract_trace_id(request)
    return create_error_response(
        status_code=HTTP_UNPROCESSABLE_ENTITY,
        code=ErrorCodes.VALIDATION_ERROR,
        message="Request validation failed",
        trace_id=trace_id,
        details={"errors": jsonable_encoder(exc.errors())},
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle generic exceptions with standard envelope."""
    trace_id = extract_trace_id(request)

    log.error(
        "Unexpected error occurred",
        extra={
            "code": ErrorCodes.INTERNAL_ERROR,
            "error_message": "An unexpected error occurred",
            "trace_id": trace_id,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )

    return create_error_response(
        status_code=HTTP_INTERNAL_SERVER_ERROR,
        code=ErrorCodes.INTERNAL_ERROR,
        message="An unexpected error occurred",
        trace_id=trace_id,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on `app`."""
    app.add_exception_handler(ForecastError, handle_forecast_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_exception)
