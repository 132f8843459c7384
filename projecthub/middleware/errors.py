"""FastAPI exception handlers for storage gateway errors."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from projecthub.core.logging import get_logger
from projecthub.integrations.storage.errors import (
    AssetValidationError,
    BackendUnavailable,
    ConfigurationError,
    StorageError,
    TooLarge,
    WriteFailure,
)

logger = get_logger(__name__)


def status_for(exc: StorageError) -> int:
    """Map a storage error to the HTTP status the caller sees."""
    if isinstance(exc, TooLarge):
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    if isinstance(exc, AssetValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, WriteFailure):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, BackendUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if status_code < 500 else logger.error
    log(
        "storage error",
        error_type=type(exc).__name__,
        message=exc.message,
        path=request.url.path,
        status_code=status_code,
        **exc.details,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorageError, storage_exception_handler)
