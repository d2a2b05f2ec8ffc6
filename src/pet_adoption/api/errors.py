"""
pet_adoption.api.errors

Request-boundary error translation.

Responsibilities:
- Map domain errors (`pet_adoption.errors`) onto `{message}` JSON responses.
- Report request-shape errors (FastAPI/pydantic) as 400 with one joined message.
- Log unexpected failures and hide their details behind a generic 500.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from pet_adoption.errors import InternalError, PetAdoptionError
from pet_adoption.observability.logging import get_logger

log = get_logger(__name__)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _describe(error: dict) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{loc}: {error.get('msg', 'invalid value')}" if loc else str(error.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PetAdoptionError)
    async def _domain_error(_: Request, exc: PetAdoptionError) -> JSONResponse:
        if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            log.error("request_failed", error_type=type(exc).__name__, error=exc.message)
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _message(HTTP_400_BAD_REQUEST, ", ".join(_describe(e) for e in exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error", error_type=type(exc).__name__)
        return _message(HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message)
