"""
SlideGrab - Main Application Entry Point

Turns a SlideShare presentation into a downloadable PDF, PPTX or ZIP of
slide images and publishes it to the remote file store.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core import PipelineError, get_settings, setup_logging
from src.api.routes import convert

logger = logging.getLogger(__name__)


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": True, "detail": detail},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()

    logger.info(f"🚀 Starting {settings.app_name}...")
    if settings.has_ftp:
        logger.info(f"📡 Remote store: \033[96mftp://{settings.ftp_host}:{settings.ftp_port}/{settings.remote_root}\033[0m")
    else:
        logger.warning("⚠️  FTP is not configured - conversions will fail at the publish step")
    if not settings.base_url:
        logger.warning("⚠️  BASE_URL is not set - download links will be relative")

    yield

    logger.info(f"👋 Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Download SlideShare presentations as PDF, PPTX or image archives",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(request: Request, exc: PipelineError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc!r}")
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, "Invalid query parameters")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return _error_response(500, "Internal Server Error")

    app.include_router(convert.router)

    @app.get("/")
    async def index():
        """API entry point."""
        return {"message": "API entry"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "remote_store_configured": settings.has_ftp,
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
