"""Exception handlers mapping domain errors onto ``{"error": message}`` bodies."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from marketplace.shared.errors import MarketplaceError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

GENERIC_FAILURE = "Terjadi kesalahan pada server"


def first_message(messages) -> str:
    """First human-readable message out of Protean's ``{field: [messages]}``."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    return "Data tidak valid"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, first_message(exc.messages))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else None
    return _error(400, f"Permintaan tidak valid: {detail}" if detail else "Permintaan tidak valid")


async def handle_object_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error(404, "Data tidak ditemukan")


async def handle_expected_version_error(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("concurrent_modification", path=request.url.path)
    return _error(409, "Data sedang diubah oleh permintaan lain, silakan coba lagi")


async def handle_marketplace_error(request: Request, exc: MarketplaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("dependency_failed", path=request.url.path, error=exc.message)
    return _error(exc.status_code, exc.message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _error(500, GENERIC_FAILURE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_object_not_found)
    app.add_exception_handler(ExpectedVersionError, handle_expected_version_error)
    app.add_exception_handler(MarketplaceError, handle_marketplace_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
