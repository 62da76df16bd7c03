# src/technofest/scripts/seed.py
"""Insert sample registrations for local testing.

Usage:
    python -m technofest.scripts.seed [--cnic PATH] [--payment PATH]

Without image paths a 1x1 PNG placeholder is stored for both documents.
Samples whose transaction id already exists are skipped.
"""
from __future__ import annotations

import argparse
import base64
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session

from technofest.db.session import SessionLocal, create_tables
from technofest.models import Registration
from technofest.services.registration import event_display_name

PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

SAMPLES: list[dict[str, str | None]] = [
    {
        "name": "Seed Test One",
        "email": "seed1@example.com",
        "contact": "+92 300 0000001",
        "program": "BS Computer Science",
        "semester": "6th",
        "rollno": "SEED-001",
        "event": "speed-programming",
        "team": "Alpha Testers",
        "user_id": "SEED-USER-001",
        "transaction_id": "TX-SEED-001",
        "account_no": "1234567890",
    },
    {
        "name": "Seed Test Two",
        "email": "seed2@example.com",
        "contact": "+92 300 0000002",
        "program": "BS Software Engineering",
        "semester": "8th",
        "rollno": "SEED-002",
        "event": "web-development",
        "team": None,
        "user_id": "SEED-USER-002",
        "transaction_id": "TX-SEED-002",
        "account_no": "9876543210",
    },
]


def seed(db: Session, cnic: bytes, payment: bytes) -> list[int]:
    """Insert missing samples and return the ids of the rows created."""
    created: list[int] = []
    for sample in SAMPLES:
        exists = db.scalar(
            select(Registration.id).where(Registration.transaction_id == sample["transaction_id"])
        )
        if exists is not None:
            print(f"Skipping {sample['transaction_id']}: already present (id {exists})")
            continue
        registration = Registration(
            **{**sample, "event": event_display_name(sample["event"] or "")},
            cnic_or_student_card=cnic,
            payment_slip=payment,
        )
        db.add(registration)
        db.flush()
        created.append(registration.id)
        print(f"Inserted registration {registration.id} ({registration.event})")
    db.commit()
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Insert sample registrations")
    parser.add_argument("--cnic", type=Path, help="Image to store as the ID document")
    parser.add_argument("--payment", type=Path, help="Image to store as the payment slip")
    args = parser.parse_args()

    cnic = args.cnic.read_bytes() if args.cnic else PLACEHOLDER_PNG
    payment = args.payment.read_bytes() if args.payment else PLACEHOLDER_PNG

    create_tables()
    db = SessionLocal()
    try:
        seed(db, cnic, payment)
    finally:
        db.close()


if __name__ == "__main__":
    main()
