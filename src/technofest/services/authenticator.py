"""Single-administrator authentication: throttle, verify, issue, validate."""

from __future__ import annotations

import hmac
import logging
import math
from dataclasses import dataclass

from technofest.core.security import verify_password
from technofest.core.settings import Settings
from technofest.services.credentials import (
    CredentialStrategy,
    SessionCredentials,
    TokenCredentials,
)
from technofest.services.errors import (
    AuthError,
    IncompleteLogin,
    InvalidCredentials,
    LockedOut,
    MissingCredential,
)
from technofest.services.throttle import Clock, LoginThrottle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminIdentity:
    """Identity resolved from a valid credential."""

    subject: str


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    credential: str
    subject: str
    expires_in: int


class AdminAuthenticator:
    """Authenticate the administrator and gate requests on the issued credential.

    Owns one :class:`LoginThrottle` and one credential strategy, selected once
    at construction.
    """

    def __init__(
        self,
        admin_username: str,
        admin_password_hash: str,
        throttle: LoginThrottle,
        credentials: CredentialStrategy,
        cookie_name: str = "admin_session",
    ) -> None:
        self._admin_username = admin_username
        self._admin_password_hash = admin_password_hash
        self.throttle = throttle
        self.credentials = credentials
        self.cookie_name = cookie_name

    @property
    def accepts_bearer_header(self) -> bool:
        """Only self-verifying tokens may also arrive in an Authorization header."""
        return isinstance(self.credentials, TokenCredentials)

    def authenticate(self, address: str, username: str | None, password: str | None) -> LoginResult:
        """Check a login attempt from *address*.

        Raises:
            LockedOut: The address is locked, or this failure locked it.
            IncompleteLogin: Username or password is empty.
            InvalidCredentials: The pair did not match.
        """
        remaining = self.throttle.lockout_remaining(address)
        if remaining is not None:
            logger.info("Rejected login from locked-out address %s", address)
            raise LockedOut(retry_after_minutes=math.ceil(remaining / 60))

        if not username or not password:
            self.throttle.record_failed_attempt(address)
            raise IncompleteLogin()

        username_match = hmac.compare_digest(
            username.encode("utf-8"), self._admin_username.encode("utf-8")
        )
        password_match = verify_password(password, self._admin_password_hash)

        if not (username_match and password_match):
            outcome = self.throttle.record_failed_attempt(address)
            if outcome.locked:
                minutes = math.ceil(self.throttle.lockout_seconds / 60)
                logger.warning("Locked out %s after repeated failed logins", address)
                raise LockedOut(
                    retry_after_minutes=minutes,
                    message=f"Too many failed login attempts. Account locked for {minutes} minutes.",
                )
            logger.info("Failed login from %s", address)
            raise InvalidCredentials(outcome.remaining)

        self.throttle.reset_login_attempts(address)
        self.throttle.sweep_expired()
        self.credentials.sweep_expired()
        credential = self.credentials.issue(self._admin_username)
        logger.info("Admin login succeeded from %s", address)
        return LoginResult(
            credential=credential,
            subject=self._admin_username,
            expires_in=int(self.credentials.ttl_seconds),
        )

    def authorize(self, credential: str | None, *, refresh: bool = True) -> AdminIdentity:
        """Resolve *credential* to the admin identity.

        Session credentials slide forward as part of this call unless
        ``refresh`` is false.

        Raises:
            MissingCredential: Nothing was presented.
            ExpiredCredential: The credential is unknown, revoked, or expired.
            MalformedCredential: A token failed verification.
        """
        if not credential:
            raise MissingCredential()
        subject = self.credentials.validate(credential, refresh=refresh)
        return AdminIdentity(subject=subject)

    def is_authorized(self, credential: str | None) -> AdminIdentity | None:
        """Non-refreshing check that reports failure as ``None``."""
        try:
            return self.authorize(credential, refresh=False)
        except AuthError:
            return None

    def invalidate(self, credential: str | None) -> None:
        """Best-effort logout; a no-op for absent credentials and for tokens."""
        if credential:
            self.credentials.revoke(credential)


def build_authenticator(settings: Settings, clock: Clock | None = None) -> AdminAuthenticator:
    """Construct the authenticator for the configured credential strategy."""
    clock_kwargs = {"clock": clock} if clock is not None else {}
    throttle = LoginThrottle(
        max_attempts=settings.login_max_attempts,
        window_seconds=settings.login_window_minutes * 60,
        lockout_seconds=settings.login_lockout_minutes * 60,
        **clock_kwargs,
    )
    credentials: CredentialStrategy
    if settings.credential_strategy == "token":
        credentials = TokenCredentials(
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.credential_ttl_seconds,
            **clock_kwargs,
        )
    else:
        credentials = SessionCredentials(
            ttl_seconds=settings.credential_ttl_seconds,
            **clock_kwargs,
        )
    return AdminAuthenticator(
        admin_username=settings.admin_username,
        admin_password_hash=settings.admin_password_hash,
        throttle=throttle,
        credentials=credentials,
        cookie_name=settings.cookie_name,
    )
