# tenthouse/core/errors.py
"""
Error taxonomy for the testimonials API.

Services raise these; the handlers registered in tenthouse.main turn every
one of them into the same JSON shape:

    {"status": "error", "kind": "<machine name>", "error": "<message>", "errors": [...]}
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TentHouseError(Exception):
    """Base exception for everything the API reports to a caller."""

    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = list(errors) if errors else [message]
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "error",
            "kind": self.kind,
            "error": self.message,
            "errors": self.errors,
        }


class ValidationError(TentHouseError):
    """User-correctable input problem. Carries one entry per failed rule."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str] | str, message: str = "Please correct the highlighted fields"):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(message, errors)


class InvalidStatusError(TentHouseError):
    kind = "invalid_status"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: str):
        self.value = value
        super().__init__("Invalid status")


class RateLimitError(TentHouseError):
    kind = "rate_limited"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str, retry_after: int = 3600):
        self.retry_after = retry_after
        super().__init__(message)


class NotFoundError(TentHouseError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Testimonial"):
        super().__init__(f"{resource} not found")


class AuthenticationError(TentHouseError):
    kind = "not_authenticated"
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class StorageError(TentHouseError):
    """Infrastructure failure. The message is generic; details go to the log only."""

    kind = "storage_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Something went wrong. Please try again."):
        super().__init__(message)


class ConfigurationError(TentHouseError):
    """Fatal at startup: the process should not serve requests."""

    kind = "configuration_error"


class NotificationError(TentHouseError):
    kind = "notification_error"


# ---------- FastAPI wiring ----------

def _error_response(exc: TentHouseError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def tenthouse_error_handler(request: Request, exc: TentHouseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.kind)
    return _error_response(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    body = {"status": "error", "kind": "http_error", "error": message, "errors": [message]}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    body = {
        "status": "error",
        "kind": "request_validation_error",
        "error": "Malformed request",
        "errors": jsonable_encoder(errors),
    }
    return JSONResponse(status_code=422, content=body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = {
        "status": "error",
        "kind": "internal_error",
        "error": "Internal server error",
        "errors": ["Internal server error"],
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TentHouseError, tenthouse_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
