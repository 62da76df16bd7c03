"""Credential strategies for the admin login.

Two interchangeable strategies share one interface:

* :class:`SessionCredentials` keeps server-side sessions keyed by a random id.
  Sessions slide forward on every validated use and can be revoked.
* :class:`TokenCredentials` issues self-verifying JWTs with a fixed expiry.
  Nothing is stored, so a token cannot be revoked before it expires.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import UTC, datetime
from threading import Lock
from typing import Protocol

from jose import JWTError, jwt

from technofest.core.security import generate_session_id
from technofest.services.errors import ExpiredCredential, MalformedCredential
from technofest.services.throttle import Clock

ADMIN_TOKEN_KIND = "admin"


class CredentialStrategy(Protocol):
    """Interface implemented by every credential strategy."""

    ttl_seconds: float

    def issue(self, subject: str) -> str:
        """Mint a credential for *subject*."""

    def validate(self, credential: str, *, refresh: bool = True) -> str:
        """Return the subject of a valid credential or raise an ``AuthError``."""

    def revoke(self, credential: str) -> None:
        """Invalidate *credential* where the strategy supports it."""

    def sweep_expired(self) -> int:
        """Drop expired server-side state."""


@dataclass
class AdminSession:
    """Server-held session for the administrator."""

    subject: str
    created_at: float
    expires_at: float


class SessionRegistry:
    """Lock-guarded mapping of session id to :class:`AdminSession`."""

    def __init__(self) -> None:
        self._sessions: dict[str, AdminSession] = {}
        self._lock = Lock()

    def put(self, session_id: str, session: AdminSession) -> None:
        with self._lock:
            self._sessions[session_id] = session

    def touch(self, session_id: str, now: float, ttl_seconds: float, *, refresh: bool) -> str:
        """Return the subject for *session_id*, sliding its expiry if asked.

        Expired entries are deleted before :class:`ExpiredCredential` is raised.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise ExpiredCredential()
            if session.expires_at < now:
                del self._sessions[session_id]
                raise ExpiredCredential()
            if refresh:
                session.expires_at = now + ttl_seconds
            return session.subject

    def get(self, session_id: str) -> AdminSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_before(self, now: float) -> int:
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.expires_at < now]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class SessionCredentials:
    """Stored sessions with a sliding expiry."""

    def __init__(
        self,
        ttl_seconds: float = 24 * 3600,
        clock: Clock = time.time,
        registry: SessionRegistry | None = None,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self.registry = registry or SessionRegistry()

    def issue(self, subject: str) -> str:
        now = self._clock()
        session_id = generate_session_id()
        self.registry.put(
            session_id,
            AdminSession(subject=subject, created_at=now, expires_at=now + self.ttl_seconds),
        )
        return session_id

    def validate(self, credential: str, *, refresh: bool = True) -> str:
        return self.registry.touch(credential, self._clock(), self.ttl_seconds, refresh=refresh)

    def revoke(self, credential: str) -> None:
        self.registry.delete(credential)

    def sweep_expired(self) -> int:
        return self.registry.purge_before(self._clock())


class TokenCredentials:
    """Signed JWTs with a fixed expiry and no server-side state."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl_seconds: float = 24 * 3600,
        clock: Clock = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, subject: str) -> str:
        now = self._clock()
        to_encode: dict[str, object] = {
            "sub": subject,
            "type": ADMIN_TOKEN_KIND,
            "iat": datetime.fromtimestamp(now, UTC),
            "exp": datetime.fromtimestamp(now + self.ttl_seconds, UTC),
        }
        encoded_jwt: str = jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)
        return encoded_jwt

    def validate(self, credential: str, *, refresh: bool = True) -> str:
        """Verify signature, expiry, and kind. Tokens never slide.

        Expiry is checked against the injected clock rather than by ``jose``.
        """
        try:
            payload = jwt.decode(
                credential,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise MalformedCredential() from err

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if (
            not subject
            or payload.get("type") != ADMIN_TOKEN_KIND
            or not isinstance(expires_at, (int, float))
        ):
            raise MalformedCredential()
        if expires_at < self._clock():
            raise ExpiredCredential(MalformedCredential.message)
        return str(subject)

    def revoke(self, credential: str) -> None:
        # Stateless: the client drops its copy, the token stays valid until exp.
        return None

    def sweep_expired(self) -> int:
        return 0
