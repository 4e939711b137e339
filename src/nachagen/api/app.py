"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nachagen.api.routes import ach, health
from nachagen.core.config import AppSettings
from nachagen.core.exceptions import FieldValidationError, FileAlreadyExistsError
from nachagen.core.logging import get_logger, setup_logger
from nachagen.persistence import create_file_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    setup_logger(level=settings.log_level, format_type=settings.log_format)
    app.state.settings = settings
    app.state.file_store = create_file_store(settings)
    yield


async def field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    logger.warning(
        "Rejected ACH request",
        extra={"record": exc.record, "field": exc.field, "constraint": exc.constraint},
    )
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "record": exc.record,
            "field": exc.field,
            "constraint": exc.constraint,
        },
    )


async def file_exists_handler(request: Request, exc: FileAlreadyExistsError) -> JSONResponse:
    logger.warning("Refused to overwrite ACH file", extra={"path": exc.path})
    return JSONResponse(status_code=409, content={"detail": str(exc), "path": exc.path})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="NACHA File Generator",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(FieldValidationError, field_validation_handler)
    app.add_exception_handler(FileAlreadyExistsError, file_exists_handler)
    app.include_router(health.router)
    app.include_router(ach.router, prefix="/ach")
    return app
