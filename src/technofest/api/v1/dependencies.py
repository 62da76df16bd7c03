"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from technofest.core.settings import settings
from technofest.db.session import get_db
from technofest.services.authenticator import AdminAuthenticator, AdminIdentity
from technofest.services.errors import AuthError
from technofest.services.rate_limit import RateLimiter
from technofest.services.registration import RegistrationService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

BEARER_PREFIX = "Bearer "


def get_authenticator(request: Request) -> AdminAuthenticator:
    """Return the process-wide authenticator built at startup."""
    authenticator: AdminAuthenticator = request.app.state.authenticator
    return authenticator


def get_registration_limiter(request: Request) -> RateLimiter:
    limiter: RateLimiter = request.app.state.registration_limiter
    return limiter


def get_registration_service(request: Request) -> RegistrationService:
    service: RegistrationService = request.app.state.registration_service
    return service


AuthenticatorDep = Annotated[AdminAuthenticator, Depends(get_authenticator)]
RegistrationLimiterDep = Annotated[RateLimiter, Depends(get_registration_limiter)]
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]


def client_address(request: Request) -> str:
    """Return the address used to key throttling for *request*.

    Forwarding headers are only honoured when ``TRUST_FORWARDED_HEADERS`` is
    set, since clients can forge them otherwise.
    """
    if settings.trust_forwarded_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


ClientAddressDep = Annotated[str, Depends(client_address)]


def extract_credential(request: Request, authenticator: AdminAuthenticator) -> str | None:
    """Pull the admin credential from its cookie, or a bearer header for tokens."""
    credential = request.cookies.get(authenticator.cookie_name)
    if credential:
        return credential
    if authenticator.accepts_bearer_header:
        header = request.headers.get("authorization", "")
        if header.startswith(BEARER_PREFIX):
            return header[len(BEARER_PREFIX):].strip() or None
    return None


def require_admin(request: Request, authenticator: AuthenticatorDep) -> AdminIdentity:
    """Authorize the request's credential and attach the admin identity.

    Raises:
        HTTPException: 401 when the credential is missing, expired, or invalid.
    """
    credential = extract_credential(request, authenticator)
    try:
        identity = authenticator.authorize(credential)
    except AuthError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=err.message,
        ) from err
    request.state.admin = identity
    return identity


# Type alias for authenticated admin dependency
AdminDep = Annotated[AdminIdentity, Depends(require_admin)]
