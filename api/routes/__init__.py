"""API route modules."""

from .admin_routes import router as admin_router
from .companies_routes import router as companies_router
from .global_services_routes import router as global_services_router
from .health_routes import router as health_router
from .htmx_routes import router as htmx_router
from .pages_routes import router as pages_router

__all__ = [
    "admin_router",
    "companies_router",
    "global_services_router",
    "health_router",
    "htmx_router",
    "pages_router",
]
