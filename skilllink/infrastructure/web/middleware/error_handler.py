"""
Global error handlers for the FastAPI application.
Catches and formats all exceptions consistently as `{error, message}`.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from skilllink.config import settings
from skilllink.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    AuthenticationError,
    AuthorizationError,
    EntityNotFoundError,
    DuplicateEntityError,
    ConcurrencyConflictError,
)

logger = logging.getLogger(__name__)


# Most specific first; subclasses of a listed type map like their parent
DOMAIN_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (ConcurrencyConflictError, status.HTTP_409_CONFLICT),
)


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_body(error: str, message: str, exc: Optional[BaseException] = None,
               **extra: Any) -> Dict[str, Any]:
    """Build the error payload; a stack is attached outside production."""
    body: Dict[str, Any] = {"error": error, "message": message}
    body.update(extra)
    if exc is not None and not settings.is_production:
        body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return body


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=error_body(exc.code, exc.message, exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        # Starlette's own 404 for an unmatched route
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Not Found", "message": f"Route {request.method} {request.url.path} not found"},
        )
    error = "ServerError" if exc.status_code >= 500 else "RequestError"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    message = details[0]["message"] if details else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "ValidationError", "message": message, "details": details},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "request_path": request.url.path,
            "request_method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("ServerError", str(exc) or "Internal Server Error", exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
