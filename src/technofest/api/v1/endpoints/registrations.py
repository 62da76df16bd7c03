# src/technofest/api/v1/endpoints/registrations.py
"""Registration intake, listing, and export endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError

from technofest.api.v1.dependencies import (
    AdminDep,
    ClientAddressDep,
    RegistrationLimiterDep,
    RegistrationServiceDep,
    SessionDep,
)
from technofest.schemas.registration import RegistrationCreated, RegistrationSummary
from technofest.services.errors import (
    DuplicateRegistration,
    MissingFields,
    UploadTooLarge,
)
from technofest.services.export import XLSX_MEDIA_TYPE, build_workbook, export_filename
from technofest.services.registration import RegistrationForm, list_registrations

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registrations"])

OptionalForm = Annotated[str | None, Form()]


async def _read_upload(upload: UploadFile | None, limit: int) -> bytes | None:
    """Read at most ``limit + 1`` bytes so oversized files are detected cheaply."""
    if upload is None:
        return None
    try:
        data = await upload.read(limit + 1)
    finally:
        await upload.close()
    return data or None


@router.post(
    "/register",
    summary="Submit a registration",
    status_code=status.HTTP_201_CREATED,
    response_model=RegistrationCreated,
)
async def register(
    db: SessionDep,
    service: RegistrationServiceDep,
    limiter: RegistrationLimiterDep,
    address: ClientAddressDep,
    name: OptionalForm = None,
    email: OptionalForm = None,
    contact: OptionalForm = None,
    program: OptionalForm = None,
    semester: OptionalForm = None,
    rollno: OptionalForm = None,
    event: OptionalForm = None,
    team: OptionalForm = None,
    user_id: Annotated[str | None, Form(alias="userId")] = None,
    transaction_id: Annotated[str | None, Form(alias="transactionId")] = None,
    account_no: Annotated[str | None, Form(alias="accountNo")] = None,
    cnic_or_student_card: Annotated[UploadFile | None, File(alias="cnicOrStudentCard")] = None,
    payment_slip: Annotated[UploadFile | None, File(alias="paymentSlip")] = None,
) -> RegistrationCreated:
    """Store a registration with its ID document and payment slip."""
    if not limiter.hit(address):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many registration attempts, please try again later.",
        )

    form = RegistrationForm(
        name=name,
        email=email,
        contact=contact,
        program=program,
        semester=semester,
        rollno=rollno,
        event=event,
        team=team,
        user_id=user_id,
        transaction_id=transaction_id,
        account_no=account_no,
        cnic_or_student_card=await _read_upload(cnic_or_student_card, service.max_upload_bytes),
        payment_slip=await _read_upload(payment_slip, service.max_upload_bytes),
    )

    try:
        registration = service.create(db, form)
    except (MissingFields, UploadTooLarge) as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=err.message,
        ) from err
    except DuplicateRegistration as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=err.message,
        ) from err
    except SQLAlchemyError as err:
        logger.exception("Failed to store registration")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error.",
        ) from err

    return RegistrationCreated(registration_id=registration.id, event_name=registration.event)


@router.get(
    "/registrations",
    summary="List all registrations",
    response_model=list[RegistrationSummary],
)
async def get_registrations(db: SessionDep, admin: AdminDep) -> list[RegistrationSummary]:
    """Return registrations newest first; documents are reported as present or absent."""
    return [RegistrationSummary.model_validate(row) for row in list_registrations(db)]


@router.get(
    "/registrations/export",
    summary="Download registrations as an Excel workbook",
    response_class=Response,
)
async def export_registrations(db: SessionDep, admin: AdminDep) -> Response:
    """Return an ``.xlsx`` attachment with one row per registration."""
    content = build_workbook(list_registrations(db))
    filename = export_filename(datetime.now(UTC).date())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
