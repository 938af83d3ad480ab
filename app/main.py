"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config.settings import get_settings
from app.core.error_handlers import domain_error_handler
from app.core.exceptions import DomainError
from app.core.logging import configure_logging, get_logger
from app.db.database import close_all_engines, init_db
from app.middleware.request_id import RequestIDMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()

    # Startup: Initialize database
    await init_db()
    logger.info("application_started", app=app.title)

    yield

    # Shutdown: Close database connections
    await close_all_engines()
    logger.info("application_stopped", app=app.title)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Admin console API for composing wellness programs from sessions and services",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainError, domain_error_handler)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    # Import and include routers
    from app.api.routes import catalog_router, partners_router, programs_router

    app.include_router(programs_router, prefix="/programs", tags=["Programs"])
    app.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])
    app.include_router(partners_router, prefix="/partners", tags=["Partners"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
