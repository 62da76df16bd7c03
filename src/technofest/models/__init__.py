# src/technofest/models/__init__.py
"""SQLAlchemy models for the Technofest registration API."""

from .registration import Registration

__all__ = ["Registration"]
