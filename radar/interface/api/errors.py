"""Map domain errors to HTTP responses.

Every expected failure is a DomainError subclass with a fixed status.
Anything else is logged and reported as a generic 500.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from radar.domain.error import (
    AuthenticationRequiredError,
    AuthorizationError,
    DomainError,
    DuplicateVoteError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)

ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateVoteError, status.HTTP_409_CONFLICT),
    (PollClosedError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error (400 for unmapped kinds)."""
    for error_type, code in ERROR_STATUS:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a DomainError as ``{"error": kind, "detail": message}``."""
    code = status_for(exc)
    logfire.info(
        "Request rejected",
        path=request.url.path,
        error=exc.kind,
        status_code=code,
    )
    return JSONResponse(
        status_code=code,
        content={"error": exc.kind, "detail": str(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures without leaking internals to the client."""
    logfire.exception(
        "Unhandled error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers on the app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
