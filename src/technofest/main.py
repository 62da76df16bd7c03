# src/technofest/main.py
"""Main entry point for the Technofest registration API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from technofest.api.v1 import (
    auth_router,
    images_router,
    registrations_router,
    system_router,
)
from technofest.core.settings import settings
from technofest.db.session import create_tables
from technofest.services.authenticator import build_authenticator
from technofest.services.rate_limit import RateLimiter
from technofest.services.registration import RegistrationService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Technofest Registration API",
    description="Event registration intake and administration",
    version=settings.app_version,
)

# Process-local auth and rate-limit state, shared by all request handlers
app.state.authenticator = build_authenticator(settings)
app.state.registration_limiter = RateLimiter(
    max_requests=settings.register_rate_limit,
    window_seconds=settings.register_rate_window_minutes * 60,
)
app.state.registration_service = RegistrationService(
    max_upload_bytes=settings.max_upload_bytes,
    max_total_upload_bytes=settings.max_total_upload_bytes,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(registrations_router, prefix="/api/v1")
app.include_router(images_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    create_tables()
    logger.info(
        "Started %s %s with %s credentials",
        settings.app_name,
        settings.app_version,
        settings.credential_strategy,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Technofest Registration API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("technofest.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
