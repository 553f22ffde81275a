"""
Error responses - one JSON shape for every failure.
Challenge: Map service error kinds and validation failures to stable status codes.
Body: {timestamp, status, error, message, errors?}; ``errors`` only on validation failures.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.result import ErrorKind, ServiceError
from app.schemas.user import FieldError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # No dedicated mapping: surfaces as a generic server error
    ErrorKind.INVALID_STATE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(
    status_code: int,
    message: str,
    errors: dict[str, str] | None = None,
) -> JSONResponse:
    body = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
    }
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


def service_error_response(error: ServiceError) -> JSONResponse:
    """Translate a service error kind into its HTTP status."""
    return error_response(STATUS_BY_KIND[error.kind], error.message)


def validation_error_response(field_errors: list[FieldError]) -> JSONResponse:
    """400 with field -> message. First message wins when a field has several."""
    errors: dict[str, str] = {}
    for field, message in field_errors:
        errors.setdefault(field, message)
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors)


def _field_name(loc: tuple) -> str:
    # ("body", "email") -> "email"; ("path", "user_id") -> "user_id"; ("body",) -> "body"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, wrong types, non-integer ids: same 400 shape as field validation."""
    return validation_error_response([(_field_name(tuple(e["loc"])), e["msg"]) for e in exc.errors()])


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing-level errors (unknown path, wrong method) in the common error shape."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)
