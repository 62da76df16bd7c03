# src/technofest/api/v1/endpoints/auth.py
"""Administrator authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response, status

from technofest.api.v1.dependencies import (
    AuthenticatorDep,
    ClientAddressDep,
    extract_credential,
)
from technofest.core.settings import settings
from technofest.schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from technofest.services.errors import IncompleteLogin, InvalidCredentials, LockedOut

router = APIRouter(prefix="/auth", tags=["authentication"])


def _set_credential_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=name,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


@router.post(
    "/login",
    summary="Log in as the administrator",
    response_model=LoginResponse,
)
async def login(
    payload: LoginRequest,
    response: Response,
    authenticator: AuthenticatorDep,
    address: ClientAddressDep,
) -> LoginResponse:
    """Verify the admin username and password, throttled per client address."""
    try:
        result = authenticator.authenticate(address, payload.username, payload.password)
    except LockedOut as err:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=err.message,
            headers={"Retry-After": str(err.retry_after_minutes * 60)},
        ) from err
    except IncompleteLogin as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=err.message,
        ) from err
    except InvalidCredentials as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": err.message, "remaining_attempts": err.remaining_attempts},
        ) from err

    _set_credential_cookie(response, authenticator.cookie_name, result.credential, result.expires_in)
    return LoginResponse(credential=result.credential, expires_in=result.expires_in)


@router.post(
    "/logout",
    summary="Log out the administrator",
    response_model=MessageResponse,
)
async def logout(
    request: Request,
    response: Response,
    authenticator: AuthenticatorDep,
) -> MessageResponse:
    """Invalidate the presented credential and clear the cookie.

    Token credentials stay cryptographically valid until they expire.
    """
    authenticator.invalidate(extract_credential(request, authenticator))
    response.delete_cookie(
        authenticator.cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return MessageResponse(message="Logged out successfully.")


@router.get(
    "/status",
    summary="Report whether the caller is logged in",
    response_model=AuthStatusResponse,
)
async def auth_status(request: Request, authenticator: AuthenticatorDep) -> AuthStatusResponse:
    """Check the credential without extending its lifetime."""
    identity = authenticator.is_authorized(extract_credential(request, authenticator))
    if identity is None:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, username=identity.subject)
