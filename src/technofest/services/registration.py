"""Registration intake and retrieval."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Final

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from technofest.models import Registration
from technofest.services.errors import (
    DuplicateRegistration,
    MissingFields,
    RegistrationNotFound,
    UnknownImageKind,
    UploadTooLarge,
)

logger = logging.getLogger(__name__)

UNKNOWN_EVENT: Final[str] = "Unknown Event"
OPTIONAL_FIELDS: Final = frozenset({"team", "user_id"})

# short form value -> (title, fee)
EVENT_CATALOG: Final[dict[str, tuple[str, int]]] = {
    "speed-programming": ("Speed Programming", 200),
    "web-development": ("Web Development", 200),
    "pitch-your-idea": ("Pitch Your Idea", 1000),
    "ctf": ("Capture the Flag", 200),
    "data-insights": ("Data Driven Insights", 200),
    "hackathon": ("Hackathon", 500),
}


def event_display_name(value: str) -> str:
    """Map a form event value to the name stored with the registration."""
    entry = EVENT_CATALOG.get(value)
    if entry is None:
        return UNKNOWN_EVENT
    title, fee = entry
    return f"{title} (Fee: {fee})"


@dataclass
class RegistrationForm:
    """Submitted registration fields and uploaded document bytes."""

    name: str | None = None
    email: str | None = None
    contact: str | None = None
    program: str | None = None
    semester: str | None = None
    rollno: str | None = None
    event: str | None = None
    transaction_id: str | None = None
    account_no: str | None = None
    cnic_or_student_card: bytes | None = None
    payment_slip: bytes | None = None
    team: str | None = None
    user_id: str | None = None

    def missing(self) -> list[str]:
        """Return the names of required fields that are empty."""
        return [
            f.name
            for f in fields(self)
            if f.name not in OPTIONAL_FIELDS and not getattr(self, f.name)
        ]


class RegistrationService:
    """Validate and persist registrations."""

    def __init__(self, max_upload_bytes: int, max_total_upload_bytes: int) -> None:
        self.max_upload_bytes = max_upload_bytes
        self.max_total_upload_bytes = max_total_upload_bytes

    def check_uploads(self, *uploads: bytes | None) -> None:
        """Raise :class:`UploadTooLarge` when a file or the total exceeds the limits."""
        sizes = [len(u) for u in uploads if u]
        if any(size > self.max_upload_bytes for size in sizes):
            raise UploadTooLarge()
        if sum(sizes) > self.max_total_upload_bytes:
            raise UploadTooLarge()

    def create(self, db: Session, form: RegistrationForm) -> Registration:
        """Store *form* and return the new registration.

        Raises:
            MissingFields: A required field or document is empty.
            UploadTooLarge: A document exceeds the size limits.
            DuplicateRegistration: The transaction id was already used.
        """
        missing = form.missing()
        if missing:
            logger.info("Rejected registration missing %s", ", ".join(missing))
            raise MissingFields()
        self.check_uploads(form.cnic_or_student_card, form.payment_slip)

        registration = Registration(
            name=form.name,
            email=form.email,
            contact=form.contact,
            program=form.program,
            semester=form.semester,
            rollno=form.rollno,
            event=event_display_name(form.event or ""),
            team=form.team or None,
            user_id=form.user_id or None,
            transaction_id=form.transaction_id,
            account_no=form.account_no,
            cnic_or_student_card=form.cnic_or_student_card,
            payment_slip=form.payment_slip,
        )
        db.add(registration)
        try:
            db.commit()
        except IntegrityError as err:
            db.rollback()
            raise DuplicateRegistration() from err
        db.refresh(registration)
        logger.info("Stored registration %d for %s", registration.id, registration.event)
        return registration


def list_registrations(db: Session) -> list[dict[str, object]]:
    """Return every registration newest first, with image presence as booleans."""
    stmt = select(
        Registration.id,
        Registration.name,
        Registration.email,
        Registration.contact,
        Registration.program,
        Registration.semester,
        Registration.rollno,
        Registration.event,
        Registration.team,
        Registration.transaction_id,
        Registration.account_no,
        Registration.created_at,
        Registration.cnic_or_student_card.is_not(None).label("has_cnic_or_student_card"),
        Registration.payment_slip.is_not(None).label("has_payment_slip"),
    ).order_by(Registration.created_at.desc(), Registration.id.desc())
    return [dict(row._mapping) for row in db.execute(stmt)]


IMAGE_COLUMNS: Final = {
    "cnic": Registration.cnic_or_student_card,
    "payment": Registration.payment_slip,
}


def load_image(db: Session, registration_id: int, kind: str) -> bytes | None:
    """Return the stored document bytes of *kind* (``cnic`` or ``payment``).

    Raises:
        RegistrationNotFound: No registration with *registration_id* exists.
        UnknownImageKind: *kind* is not a known document type.
    """
    column = IMAGE_COLUMNS.get(kind)
    if column is None:
        raise UnknownImageKind()
    row = db.execute(
        select(Registration.id, column).where(Registration.id == registration_id)
    ).first()
    if row is None:
        raise RegistrationNotFound()
    return row[1]
