# tests/helpers.py
"""Shared constants and builders for the test suite."""
from __future__ import annotations

import time

ADMIN_USERNAME = "iamadmin"
ADMIN_PASSWORD = "correct horse battery staple"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    def __init__(self, start: float | None = None) -> None:
        self.now = time.time() if start is None else start

    def __call__(self) -> float:
        return self.now

    def advance(self, *, seconds: float = 0, minutes: float = 0, hours: float = 0) -> None:
        self.now += seconds + minutes * 60 + hours * 3600


def registration_form(**overrides: str | None) -> dict[str, str]:
    """Return multipart form fields for a valid registration."""
    data: dict[str, str | None] = {
        "name": "Ayesha Khan",
        "email": "ayesha@example.com",
        "contact": "+92 300 1234567",
        "program": "BS Computer Science",
        "semester": "6th",
        "rollno": "CS-2021-042",
        "event": "hackathon",
        "team": "Null Pointers",
        "userId": "U-42",
        "transactionId": "TX-1001",
        "accountNo": "0123456789",
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def registration_files(
    cnic: bytes | None = PNG_BYTES,
    payment: bytes | None = JPEG_BYTES,
) -> dict[str, tuple[str, bytes, str]]:
    """Return multipart file parts for the two registration documents."""
    files: dict[str, tuple[str, bytes, str]] = {}
    if cnic is not None:
        files["cnicOrStudentCard"] = ("card.png", cnic, "image/png")
    if payment is not None:
        files["paymentSlip"] = ("slip.jpg", payment, "image/jpeg")
    return files
