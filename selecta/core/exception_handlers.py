"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the {success: false, error, details} envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from selecta.domain.exceptions import SelectaException

logger = logging.getLogger(__name__)

# Map error_code to HTTP status; anything unlisted is a server-side failure.
_ERROR_CODE_STATUS: dict[str, int] = {
    "MISSING_FIELDS": 400,
    "INVALID_LOCATION_FORMAT": 400,
    "VALIDATION_ERROR": 400,
    "FILE_VALIDATION_ERROR": 400,
    "DUPLICATE_REGISTRATION": 409,
    "REGISTRATION_NOT_FOUND": 404,
    "FILE_SAVE_ERROR": 500,
    "REGISTRATION_SAVE_ERROR": 500,
    "REGISTRATION_READ_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def _selecta_exception_handler(request: Request, exc: SelectaException) -> JSONResponse:
    """Return JSON from SelectaException.to_dict() with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    if status >= 500:
        logger.error(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.error_code,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with the framework's validation errors as details."""
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unmatched routes get the fixed not-found body; other HTTP errors keep their detail."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "success": False,
                "error": "Not found",
                "message": "The requested endpoint does not exist",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 carrying the exception text."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "details": str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: SelectaException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(SelectaException, _selecta_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
