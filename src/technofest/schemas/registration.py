"""Registration-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegistrationCreated(BaseModel):
    """Response returned after a registration is stored."""

    message: str = Field("Registration successful!", description="Human-readable status")
    registration_id: int = Field(..., description="Identifier of the stored registration")
    event_name: str = Field(..., description="Full display name of the chosen competition")


class RegistrationSummary(BaseModel):
    """A registration as listed for the administrator, without image bytes."""

    id: int
    name: str
    email: str
    contact: str
    program: str
    semester: str
    rollno: str
    event: str
    team: str | None = None
    transaction_id: str
    account_no: str
    created_at: datetime
    has_cnic_or_student_card: bool = Field(..., description="True if the ID document is stored")
    has_payment_slip: bool = Field(..., description="True if the payment slip is stored")

    model_config = ConfigDict(from_attributes=True)
