# tests/test_throttle.py
"""Tests for per-address login throttling."""

from __future__ import annotations

import threading

import pytest

from technofest.services.throttle import LoginThrottle
from tests.helpers import FakeClock

ADDRESS = "10.0.0.1"


@pytest.fixture()
def throttle(clock: FakeClock) -> LoginThrottle:
    return LoginThrottle(
        max_attempts=5,
        window_seconds=15 * 60,
        lockout_seconds=30 * 60,
        clock=clock,
    )


class TestLockoutThreshold:
    """Failures accumulate to a lockout at the threshold."""

    def test_fewer_than_threshold_does_not_lock(self, throttle):
        for _ in range(4):
            assert throttle.record_failed_attempt(ADDRESS).locked is False
        assert throttle.is_locked_out(ADDRESS) is False
        assert throttle.remaining_attempts(ADDRESS) == 1

    def test_threshold_locks(self, throttle):
        results = [throttle.record_failed_attempt(ADDRESS).locked for _ in range(5)]
        assert results == [False, False, False, False, True]
        assert throttle.is_locked_out(ADDRESS) is True

    def test_addresses_are_independent(self, throttle):
        for _ in range(5):
            throttle.record_failed_attempt(ADDRESS)
        assert throttle.is_locked_out("10.0.0.2") is False
        assert throttle.remaining_attempts("10.0.0.2") == 5

    def test_unknown_address_is_not_locked(self, throttle):
        assert throttle.is_locked_out("192.168.1.1") is False
        assert throttle.lockout_remaining("192.168.1.1") is None


class TestLockoutExpiry:
    """Lockouts last their full duration and then vanish lazily."""

    def test_locked_until_duration_elapses(self, throttle, clock):
        for _ in range(5):
            throttle.record_failed_attempt(ADDRESS)

        clock.advance(minutes=29, seconds=59)
        assert throttle.is_locked_out(ADDRESS) is True

        clock.advance(seconds=1)
        assert throttle.is_locked_out(ADDRESS) is False
        assert len(throttle) == 0

    def test_lockout_remaining_counts_down(self, throttle, clock):
        for _ in range(5):
            throttle.record_failed_attempt(ADDRESS)
        assert throttle.lockout_remaining(ADDRESS) == pytest.approx(30 * 60)

        clock.advance(minutes=10)
        assert throttle.lockout_remaining(ADDRESS) == pytest.approx(20 * 60)

    def test_attempt_after_lockout_starts_fresh_window(self, throttle, clock):
        for _ in range(5):
            throttle.record_failed_attempt(ADDRESS)
        clock.advance(minutes=31)

        assert throttle.is_locked_out(ADDRESS) is False
        assert throttle.record_failed_attempt(ADDRESS).locked is False
        assert throttle.remaining_attempts(ADDRESS) == 4


class TestWindow:
    """Only failures inside the rolling window count toward lockout."""

    def test_stale_window_resets_count(self, throttle, clock):
        for _ in range(3):
            throttle.record_failed_attempt(ADDRESS)
        clock.advance(minutes=16)

        assert throttle.record_failed_attempt(ADDRESS).locked is False
        assert throttle.remaining_attempts(ADDRESS) == 4

    def test_threshold_takes_priority_over_window_reset(self, throttle, clock):
        for _ in range(4):
            throttle.record_failed_attempt(ADDRESS)
        clock.advance(minutes=20)

        # Fifth failure lands outside the window but still locks.
        assert throttle.record_failed_attempt(ADDRESS).locked is True
        assert throttle.is_locked_out(ADDRESS) is True

    def test_failure_exactly_at_window_edge_still_accumulates(self, throttle, clock):
        throttle.record_failed_attempt(ADDRESS)
        clock.advance(minutes=15)
        throttle.record_failed_attempt(ADDRESS)
        assert throttle.remaining_attempts(ADDRESS) == 3


class TestReset:
    def test_reset_clears_history(self, throttle):
        for _ in range(4):
            throttle.record_failed_attempt(ADDRESS)
        throttle.reset_login_attempts(ADDRESS)

        assert throttle.remaining_attempts(ADDRESS) == 5
        assert throttle.record_failed_attempt(ADDRESS).locked is False

    def test_reset_clears_active_lockout(self, throttle):
        for _ in range(5):
            throttle.record_failed_attempt(ADDRESS)
        throttle.reset_login_attempts(ADDRESS)
        assert throttle.is_locked_out(ADDRESS) is False

    def test_reset_is_idempotent(self, throttle):
        throttle.reset_login_attempts(ADDRESS)
        throttle.reset_login_attempts(ADDRESS)
        assert len(throttle) == 0


def test_sweep_removes_only_lapsed_lockouts(throttle, clock):
    for _ in range(5):
        throttle.record_failed_attempt("10.0.0.1")
    throttle.record_failed_attempt("10.0.0.2")
    clock.advance(minutes=45)

    assert throttle.sweep_expired() == 1
    assert throttle.is_locked_out("10.0.0.1") is False
    assert throttle.remaining_attempts("10.0.0.2") == 4


def test_concurrent_failures_are_all_counted(clock):
    throttle = LoginThrottle(max_attempts=1000, clock=clock)
    threads = [
        threading.Thread(
            target=lambda: [throttle.record_failed_attempt(ADDRESS) for _ in range(50)]
        )
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert throttle.remaining_attempts(ADDRESS) == 1000 - 400


def test_failure_reports_its_own_remaining_count(throttle):
    outcomes = [throttle.record_failed_attempt(ADDRESS) for _ in range(5)]
    assert [o.remaining for o in outcomes] == [4, 3, 2, 1, 0]


def test_concurrent_failures_report_distinct_counts(clock):
    throttle = LoginThrottle(max_attempts=1000, clock=clock)
    reported: list[int] = []
    reported_lock = threading.Lock()

    def fail() -> None:
        for _ in range(50):
            remaining = throttle.record_failed_attempt(ADDRESS).remaining
            with reported_lock:
                reported.append(remaining)

    threads = [threading.Thread(target=fail) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(reported) == list(range(600, 1000))
