"""Error taxonomy and the handlers that turn it into JSON responses.

Every error body has the shape ``{"error": message}``, with an extra
``"details"`` key when the error carries one.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ExamBuddyError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, *, details: Any = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(ExamBuddyError):
    """Missing, invalid or expired credentials (401, or 403 for a bad token)."""

    status_code = 401


class ValidationError(ExamBuddyError):
    status_code = 400


class NotFoundError(ExamBuddyError):
    status_code = 404


class ConflictError(ExamBuddyError):
    status_code = 409


class UpstreamError(ExamBuddyError):
    """The LLM call failed or returned something unusable."""

    status_code = 500


class InternalError(ExamBuddyError):
    status_code = 500


class ClientDisconnectedError(ExamBuddyError):
    # nginx convention; the client never sees it
    status_code = 499


def error_body(message: str, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def exambuddy_error_handler(request: Request, exc: ExamBuddyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content=error_body("Invalid request body.", details))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Internal Server Error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExamBuddyError, exambuddy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
