"""
Error reporter: turns every failure (domain, malformed body, routing, unexpected)
into the uniform error envelope.

    {"path": ..., "timestamp": <ms since epoch>, "message": ...,
     "validationErrors": {...}}   # last key only for validation failures
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.domain.errors import (
    DomainError,
    EmailFailure,
    InvalidTokenError,
    ValidationFailure,
)
from accounts.domain.messages import MessageKey, translate
from accounts.presentation.locale import locale_of
from accounts.schemas.responses import ErrorOut

logger = logging.getLogger(__name__)

STATUS_BY_FAILURE: dict[type[DomainError], int] = {
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    EmailFailure: status.HTTP_502_BAD_GATEWAY,
    InvalidTokenError: status.HTTP_400_BAD_REQUEST,
}

INVALID_FIELD_KEYS: dict[str, MessageKey] = {
    "username": MessageKey.USERNAME_INVALID,
    "email": MessageKey.EMAIL_INVALID,
    "password": MessageKey.PASSWORD_INVALID,
}

HTTP_STATUS_KEYS: dict[int, MessageKey] = {
    status.HTTP_404_NOT_FOUND: MessageKey.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: MessageKey.METHOD_NOT_ALLOWED,
}


def now_millis() -> int:
    return int(time.time() * 1000)


def build_envelope(
    *,
    path: str,
    message: str,
    validation_errors: dict[str, str] | None = None,
) -> ErrorOut:
    return ErrorOut(
        path=path,
        timestamp=now_millis(),
        message=message,
        validation_errors=validation_errors,
    )


def envelope_for(exc: DomainError, *, path: str, locale: str | None) -> ErrorOut:
    if exc.message_key is None:
        raise ValueError(f"{type(exc).__name__} has no client message")
    errors = exc.errors if isinstance(exc, ValidationFailure) else None
    return build_envelope(
        path=path,
        message=translate(exc.message_key, locale),
        validation_errors=errors,
    )


async def handle_domain_failure(request: Request, exc: DomainError) -> JSONResponse:
    envelope = envelope_for(exc, path=request.url.path, locale=locale_of(request))
    return JSONResponse(
        status_code=STATUS_BY_FAILURE[type(exc)], content=envelope.to_body()
    )


async def handle_malformed_request(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    locale = locale_of(request)
    fields: dict[str, MessageKey] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = loc[0] if loc and loc[0] in INVALID_FIELD_KEYS else "body"
        fields.setdefault(field, INVALID_FIELD_KEYS.get(field, MessageKey.BODY_INVALID))
    # keep the usual field order
    ordered = {
        f: translate(fields.pop(f), locale) for f in INVALID_FIELD_KEYS if f in fields
    }
    ordered.update({f: translate(key, locale) for f, key in fields.items()})

    logger.info("malformed request body", extra={"fields": list(ordered)})
    envelope = build_envelope(
        path=request.url.path,
        message=translate(MessageKey.VALIDATION_FAILURE, locale),
        validation_errors=ordered,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=envelope.to_body()
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    key = HTTP_STATUS_KEYS.get(exc.status_code)
    message = translate(key, locale_of(request)) if key else str(exc.detail)
    envelope = build_envelope(path=request.url.path, message=message)
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope.to_body(),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error", extra={"path": request.url.path})
    envelope = build_envelope(
        path=request.url.path,
        message=translate(MessageKey.INTERNAL_FAILURE, locale_of(request)),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=envelope.to_body()
    )


def install_error_handlers(app: FastAPI) -> None:
    for failure in STATUS_BY_FAILURE:
        app.add_exception_handler(failure, handle_domain_failure)
    app.add_exception_handler(RequestValidationError, handle_malformed_request)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)
