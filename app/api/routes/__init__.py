"""API routes module."""
from app.api.routes.catalog import router as catalog_router
from app.api.routes.partners import router as partners_router
from app.api.routes.programs import router as programs_router

__all__ = [
    "catalog_router",
    "partners_router",
    "programs_router",
]
