# src/technofest/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .images import router as images_router
from .registrations import router as registrations_router
from .system import router as system_router

__all__ = [
    "auth_router",
    "images_router",
    "registrations_router",
    "system_router",
]
