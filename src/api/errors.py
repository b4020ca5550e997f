"""
Centralized error translation for API routes.

The only place where MailingListError subclasses become HTTP responses.

Mapping:
- ValidationError    → 400
- TokenNotFoundError → 401
- AuthorizationError → 401 + WWW-Authenticate: Basic realm="publish"
- StoreError         → 500
- DeliveryError      → 500
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.core.errors import (
    AuthorizationError,
    DeliveryError,
    MailingListError,
    StoreError,
    TokenNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

BASIC_CHALLENGE = 'Basic realm="publish"'

CLIENT_ERROR_STATUS_MAP: dict[type[MailingListError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    TokenNotFoundError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_401_UNAUTHORIZED,
}

SERVER_ERROR_MESSAGES: dict[type[MailingListError], str] = {
    StoreError: "Internal storage error",
    DeliveryError: "Email delivery failed",
}


def error_body(error: MailingListError, message: str | None = None) -> dict[str, Any]:
    detail: dict[str, Any] = {"code": error.code, "message": message or error.message}
    if isinstance(error, ValidationError):
        detail["field"] = error.field
    return {"detail": detail}


def map_error(error: MailingListError) -> JSONResponse:
    """Map a MailingListError to a JSON response."""
    status_code = CLIENT_ERROR_STATUS_MAP.get(type(error))

    if isinstance(error, AuthorizationError):
        # Never tell the caller which half of the credentials was wrong
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=error_body(error, "Authentication failed"),
            headers={"WWW-Authenticate": BASIC_CHALLENGE},
        )

    if status_code is not None:
        return JSONResponse(status_code=status_code, content=error_body(error))

    # Server errors: detail stays in the logs
    message = SERVER_ERROR_MESSAGES.get(type(error), "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(error, message),
    )


async def handle_mailing_list_error(request: Request, exc: MailingListError) -> JSONResponse:
    if type(exc) in CLIENT_ERROR_STATUS_MAP:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    else:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    return map_error(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MailingListError, handle_mailing_list_error)  # type: ignore[arg-type]
