"""Per-address login throttling for the admin login."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

Clock = Callable[[], float]


@dataclass
class ThrottleEntry:
    """Failure bookkeeping for one source address."""

    failure_count: int
    window_start: float
    locked_until: float | None = None


@dataclass(frozen=True)
class FailureOutcome:
    """Result of counting one failed login."""

    locked: bool
    remaining: int


class LoginThrottle:
    """Track failed logins per address and lock out after a threshold.

    Failures accumulate inside a rolling window; reaching ``max_attempts``
    locks the address for ``lockout_seconds``. State lives only in this
    process and is lost on restart.

    Parameters
    ----------
    max_attempts : int
        Failures that trigger a lockout.
    window_seconds : float
        Span over which failures accumulate.
    lockout_seconds : float
        Duration of a lockout.
    clock : callable
        Returns the current time in seconds; ``time.time`` by default.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: float = 15 * 60,
        lockout_seconds: float = 30 * 60,
        clock: Clock = time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._entries: dict[str, ThrottleEntry] = {}
        self._lock = Lock()

    def is_locked_out(self, address: str) -> bool:
        """Return ``True`` while *address* is locked out.

        Not a pure read: an entry whose lockout has passed is deleted.
        """
        return self.lockout_remaining(address) is not None

    def lockout_remaining(self, address: str) -> float | None:
        """Return the seconds of lockout left for *address*, or ``None``.

        Expired lockouts are removed as a side effect.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(address)
            if entry is None or entry.locked_until is None:
                return None
            if now < entry.locked_until:
                return entry.locked_until - now
            del self._entries[address]
            return None

    def record_failed_attempt(self, address: str) -> FailureOutcome:
        """Count a failure for *address* and report whether it now locks.

        The remaining attempts are read under the same lock as the increment,
        so concurrent failures cannot change the count reported for this one.

        The threshold is checked before the window reset, so a failure that
        crosses the threshold still locks even when the window has lapsed.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(address)
            if entry is None:
                entry = ThrottleEntry(failure_count=0, window_start=now)
                self._entries[address] = entry
            entry.failure_count += 1

            if entry.failure_count >= self.max_attempts:
                entry.locked_until = now + self.lockout_seconds
                return FailureOutcome(locked=True, remaining=0)

            if now - entry.window_start > self.window_seconds:
                entry.failure_count = 1
                entry.window_start = now
            return FailureOutcome(
                locked=False,
                remaining=max(0, self.max_attempts - entry.failure_count),
            )

    def remaining_attempts(self, address: str) -> int:
        """Return how many failures *address* may still make before lockout."""
        with self._lock:
            entry = self._entries.get(address)
            count = entry.failure_count if entry else 0
        return max(0, self.max_attempts - count)

    def reset_login_attempts(self, address: str) -> None:
        """Forget all failure history for *address*."""
        with self._lock:
            self._entries.pop(address, None)

    def sweep_expired(self) -> int:
        """Drop entries whose lockout has lapsed; return how many were removed.

        Unlocked entries stay even with a stale window: their next failure
        still counts toward the threshold before the window resets.
        """
        now = self._clock()
        with self._lock:
            stale = [
                address
                for address, entry in self._entries.items()
                if entry.locked_until is not None and now >= entry.locked_until
            ]
            for address in stale:
                del self._entries[address]
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
