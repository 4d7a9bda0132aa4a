"""
Domain errors and their HTTP mapping.

Services raise subclasses of ``StudyBridgeError``; the handlers registered
by ``register_exception_handlers`` turn them into JSON bodies of the form
``{"message": ..., "code": ...}`` so clients can branch on ``code``
instead of matching message strings.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class StudyBridgeError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(StudyBridgeError):
    """Malformed or self-referential input."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"
    default_message = "Invalid request"


class Conflict(StudyBridgeError):
    """The requested change collides with existing state."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "conflict"
    default_message = "Conflicting state"


class InvalidCredentials(StudyBridgeError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class Unauthenticated(StudyBridgeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Not authenticated"


class Forbidden(StudyBridgeError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden"


class NotFound(StudyBridgeError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


_HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: InvalidRequest.code,
    status.HTTP_401_UNAUTHORIZED: Unauthenticated.code,
    status.HTTP_403_FORBIDDEN: Forbidden.code,
    status.HTTP_404_NOT_FOUND: NotFound.code,
}


def error_body(message: str, code: str) -> dict:
    return {"message": message, "code": code}


async def studybridge_error_handler(request: Request, exc: StudyBridgeError) -> JSONResponse:
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.code),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, "http_error")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, InvalidRequest.code),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[ERROR] Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(StudyBridgeError.default_message, StudyBridgeError.code),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(StudyBridgeError, studybridge_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
