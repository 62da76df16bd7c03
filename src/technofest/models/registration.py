# src/technofest/models/registration.py
"""SQLAlchemy model for event registrations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from technofest.db.session import Base
from technofest.db.time import utcnow


class Registration(Base):
    """A participant's registration for one competition.

    The two uploaded documents are stored inline as binary columns and are
    deferred so that listing queries do not load them.
    """

    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    contact: Mapped[str] = mapped_column(Text, nullable=False)
    program: Mapped[str] = mapped_column(Text, nullable=False)
    semester: Mapped[str] = mapped_column(Text, nullable=False)
    rollno: Mapped[str] = mapped_column(Text, nullable=False)
    event: Mapped[str] = mapped_column(Text, nullable=False)
    team: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    transaction_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    account_no: Mapped[str] = mapped_column(Text, nullable=False)
    cnic_or_student_card: Mapped[bytes | None] = mapped_column(
        LargeBinary, nullable=True, deferred=True
    )
    payment_slip: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, deferred=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
