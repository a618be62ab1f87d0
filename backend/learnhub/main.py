import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv


# Load .env FIRST before any other imports that might need env vars
BACKEND_DIR = Path(__file__).parent.parent
ENV_PATH = BACKEND_DIR / ".env"
load_dotenv(ENV_PATH)

from fastapi import FastAPI

from .certificates.router import router as certificates_router
from .config.logging import setup_logging
from .config.settings import Settings, get_settings
from .courses.router import router as courses_router
from .middleware.error_handlers import register_exception_handlers
from .middleware.security import PermissiveCORSMiddleware, SimpleSecurityMiddleware, limiter
from .progress.router import router as progress_router
from .storage import JsonStore


logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Register all application routers."""
    app.include_router(courses_router)
    app.include_router(progress_router)
    app.include_router(certificates_router)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings: Settings = app.state.settings
    logger.info(f"Serving data from {app.state.store.path}")
    logger.warning(
        f"Admin endpoints trust the unauthenticated '{settings.ADMIN_ROLE_HEADER}' header; "
        "do not expose this service to untrusted clients"
    )

    yield

    logger.info("Shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    if settings is None:
        try:
            settings = get_settings()
        except Exception:
            logger.exception("Failed to load settings")
            raise

    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="LearnHub API",
        description="Course catalog, lesson progress and certificates",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = JsonStore(settings.DATA_FILE)

    # Rate limiting. The limiter and its WRITE_RATE_LIMIT (read through
    # get_settings()) are process-wide, shared by every app instance.
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.state.limiter = limiter

    app.add_middleware(PermissiveCORSMiddleware, allow_origin=settings.CORS_ALLOW_ORIGIN)
    app.add_middleware(SimpleSecurityMiddleware, hsts=settings.ENVIRONMENT == "production")

    register_exception_handlers(app)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Check application health status."""
        return {"status": "healthy"}

    _register_routers(app)

    return app


if __name__ == "__main__":
    import uvicorn

    from learnhub.config import env

    app = create_app()
    host = env("API_HOST", "127.0.0.1")
    port = int(env("API_PORT", 3001))

    uvicorn.run(app, host=host, port=port)
