"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.middleware.error_handler import APIError, api_error_handler, error_handler_middleware
from src.api.middleware.latency_logging import latency_logging_middleware
from src.api.middleware.locale import locale_middleware
from src.api.middleware.request_size import request_size_limit_middleware
from src.api.routes import health, profile_page, user
from src.core.config import get_settings
from src.services.page_cache import init_page_cache, shutdown_page_cache
from src.services.user_service import shutdown_user_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)
    if settings.mock_user_api:
        logger.info("User API is simulated; profile saves are not persisted")

    await init_page_cache()
    logger.info("Page cache initialized")

    yield

    await shutdown_page_cache()
    await shutdown_user_service()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Profile Editor",
        description="Localized (English/Arabic) user profile editing form",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_exception_handler(APIError, api_error_handler)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Locale prefix redirects (innermost of the custom middlewares)
    app.add_middleware(BaseHTTPMiddleware, dispatch=locale_middleware)

    # Add error handler middleware (catches everything raised below it)
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

    # Add latency logging middleware (tracks request timing)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    # Add request size limit middleware (rejects oversized uploads early)
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_size_limit_middleware)

    # Mount health routes at root level (no prefix)
    app.include_router(health.router)

    api_router = APIRouter(prefix="/api")
    api_router.include_router(user.router)
    app.include_router(api_router)

    # Locale-prefixed pages last so /{locale} does not shadow the routes above
    app.include_router(profile_page.router)

    return app


# Create application instance
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
