"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from webtoolkit.api.v1.files_router import router as files_router
from webtoolkit.api.v1.json_router import router as json_router
from webtoolkit.api.v1.text_router import router as text_router
from webtoolkit.core.config import settings
from webtoolkit.core.exceptions import (
    AppException,
    app_exception_handler,
    validation_exception_handler,
)
from webtoolkit.schemas.response_schema import success_envelope
from webtoolkit.services.json_service import write_json
from webtoolkit.utils.files import create_dir_if_not_exists

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.app.env,
        base_url=settings.server.base_url,
        max_file_size=settings.toolkit.max_file_size,
        allowed_file_types=settings.allowed_file_types_list,
    )
    create_dir_if_not_exists(settings.storage.upload_dir)
    create_dir_if_not_exists(settings.storage.static_dir)
    yield
    logger.info("Shutting down application")


app = FastAPI(
    title=settings.app.name,
    description="HTTP helpers: uploads, strict JSON bodies, slugs and downloads",
    version=settings.app.version,
    lifespan=lifespan,
    debug=settings.app.debug,
    docs_url=None if settings.app.is_production else "/docs",
    redoc_url=None if settings.app.is_production else "/redoc",
)

# Exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return write_json(200, success_envelope({"status": "healthy"}))


@app.get("/")
async def root() -> JSONResponse:
    """Root endpoint."""
    return write_json(
        200,
        success_envelope(
            {
                "app": settings.app.name,
                "version": settings.app.version,
                "docs": app.docs_url,
            }
        ),
    )


# Register routers
app.include_router(files_router)
app.include_router(json_router)
app.include_router(text_router)


if __name__ == "__main__":
    uvicorn.run(
        "webtoolkit.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
    )
