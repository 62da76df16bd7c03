# src/technofest/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AuthStatusResponse, LoginRequest, LoginResponse, MessageResponse
from .registration import RegistrationCreated, RegistrationSummary

__all__ = [
    "AuthStatusResponse", "LoginRequest", "LoginResponse", "MessageResponse",
    "RegistrationCreated", "RegistrationSummary",
]
