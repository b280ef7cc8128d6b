"""Routes package for the Leadflow API."""

from .admin import router as admin_router
from .crm import router as crm_router
from .health import router as health_router
from .public import router as public_router

__all__ = [
    "admin_router",
    "crm_router",
    "health_router",
    "public_router",
]
