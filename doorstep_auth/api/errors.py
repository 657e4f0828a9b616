from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from doorstep_auth.domain.exceptions import AuthErrorKind, DomainError


logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    AuthErrorKind.DUPLICATE_EMAIL: 409,
    AuthErrorKind.INVALID_CREDENTIALS: 401,
    AuthErrorKind.ACCOUNT_INACTIVE: 403,
    AuthErrorKind.INVALID_OR_EXPIRED_TOKEN: 401,
    AuthErrorKind.CONFIGURATION: 500,
}


def error_envelope(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": None, "errors": errors or [message]},
    )


async def _handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_envelope(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    ]
    return error_envelope(422, "Request validation failed.", errors)


async def _handle_domain_error(_request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    if status_code >= 500:
        logger.error("api: %s", exc)
        return error_envelope(status_code, "Internal server error.")
    return error_envelope(status_code, str(exc), [exc.kind.value])


async def _handle_storage_error(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("api: storage failure", exc_info=exc)
    return error_envelope(500, "Internal server error.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(DomainError, _handle_domain_error)
    app.add_exception_handler(SQLAlchemyError, _handle_storage_error)
