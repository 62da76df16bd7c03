# src/technofest/services/__init__.py
"""Business logic services for the Technofest registration API."""

from .authenticator import AdminAuthenticator, AdminIdentity, LoginResult, build_authenticator
from .credentials import SessionCredentials, TokenCredentials
from .rate_limit import RateLimiter
from .registration import RegistrationForm, RegistrationService
from .throttle import LoginThrottle

__all__ = [
    "AdminAuthenticator",
    "AdminIdentity",
    "LoginResult",
    "build_authenticator",
    "SessionCredentials",
    "TokenCredentials",
    "RateLimiter",
    "RegistrationForm",
    "RegistrationService",
    "LoginThrottle",
]
