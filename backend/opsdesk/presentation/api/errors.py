"""Maps domain exceptions onto HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from opsdesk.domain.exceptions import (
    DataServiceError,
    EntityNotFoundError,
    RecordLoadError,
    ValidationError,
    WriteInProgressError,
)

logger = logging.getLogger(__name__)


def _error_response(code: str, message: str, status_code: int, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "error": {"code": code, **extra}},
    )


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error_response(
        "NOT_FOUND", str(exc), status.HTTP_404_NOT_FOUND,
        entity_type=exc.entity_type, entity_id=str(exc.entity_id),
    )


async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response("INVALID_INPUT", exc.message, status.HTTP_400_BAD_REQUEST, field=exc.field)


async def _busy(request: Request, exc: WriteInProgressError) -> JSONResponse:
    return _error_response("WRITE_IN_PROGRESS", str(exc), status.HTTP_409_CONFLICT, target=exc.target)


async def _load_failed(request: Request, exc: RecordLoadError) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return _error_response("LOAD_FAILED", str(exc), status.HTTP_502_BAD_GATEWAY, table=exc.table)


async def _data_failed(request: Request, exc: DataServiceError) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return _error_response(
        "DATA_SERVICE_ERROR", str(exc), status.HTTP_502_BAD_GATEWAY,
        operation=exc.operation, target=exc.target,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _invalid)
    app.add_exception_handler(WriteInProgressError, _busy)
    app.add_exception_handler(RecordLoadError, _load_failed)
    app.add_exception_handler(DataServiceError, _data_failed)
