# src/technofest/api/v1/endpoints/system.py
"""System endpoints for the Technofest API."""

from __future__ import annotations

from fastapi import APIRouter

from technofest.core.settings import settings
from technofest.services.registration import EVENT_CATALOG, event_display_name

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; suitable for the registration form.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "uploads": {
            "max_file_bytes": settings.max_upload_bytes,
            "max_total_bytes": settings.max_total_upload_bytes,
        },
        "events": [
            {"value": value, "name": event_display_name(value)} for value in EVENT_CATALOG
        ],
    }
