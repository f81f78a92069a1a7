"""Failure kinds shared by services, the media gateway and the HTTP layer.

Services never raise for expected failures. Each step returns a
``(value, failure)`` pair and the router turns a failure into an
``ApiError`` at the transport boundary, where it is rendered as the
failure envelope.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UPSTREAM: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(slots=True)
class Failure:
    kind: ErrorKind
    message: str
    details: list[str] = field(default_factory=list)
    # never rendered to the client; logged for 5xx
    cause: BaseException | None = None

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    @classmethod
    def validation(cls, message: str, *details: str) -> "Failure":
        return cls(ErrorKind.VALIDATION, message, list(details))

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized request") -> "Failure":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str) -> "Failure":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def not_found(cls, message: str) -> "Failure":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "Failure":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def upstream(cls, message: str, cause: BaseException | None = None) -> "Failure":
        return cls(ErrorKind.UPSTREAM, message, cause=cause)


class ApiError(Exception):
    """Carries a Failure out of a route handler."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


def raise_for(failure: Failure | None) -> None:
    if failure is not None:
        raise ApiError(failure)


def failure_body(status_code: int, message: str, details: list[str] | None = None) -> dict:
    return {
        "statusCode": status_code,
        "message": message,
        "errorDetails": details or [],
        "success": False,
    }


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    failure = exc.failure
    if failure.status_code >= 500:
        log.error(
            "Upstream failure on %s %s: %s",
            request.method, request.url.path, failure.message,
            exc_info=failure.cause,
        )
    return JSONResponse(
        status_code=failure.status_code,
        content=failure_body(failure.status_code, failure.message, failure.details),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        details.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=failure_body(status.HTTP_400_BAD_REQUEST, "Invalid request", details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal server error occurred."),
    )
