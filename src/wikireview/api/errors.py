"""Exception handlers translating failures into ``{"error": ...}`` responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from wikireview.core.errors import StoreError, WikiReviewError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "Invalid request"))
        # Pydantic prefixes messages raised from field validators.
        message = message.removeprefix("Value error, ")
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        if error.get("type") == "missing" and location:
            message = f"{location[-1]} is required"
        messages.append(message)
    return "; ".join(messages) or "Invalid request"


async def handle_domain_error(request: Request, exc: WikiReviewError) -> JSONResponse:
    """Render a service-layer error with its status code."""
    if isinstance(exc, StoreError):
        return _error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)
    return _error_response(exc.status_code, exc.message)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies and query strings as 400s."""
    return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log unexpected database failures and hide their details from clients."""
    logger.error(
        "Unhandled store failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the WikiReview error handlers to ``app``."""
    app.add_exception_handler(WikiReviewError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, handle_store_error)  # type: ignore[arg-type]
