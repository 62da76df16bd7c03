# src/technofest/api/v1/endpoints/images.py
"""Retrieval of stored registration documents."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import Response

from technofest.api.v1.dependencies import AdminDep, SessionDep
from technofest.services.errors import RegistrationNotFound, UnknownImageKind
from technofest.services.images import sniff_image_type
from technofest.services.registration import load_image

router = APIRouter(tags=["images"])


@router.get(
    "/image",
    summary="Fetch a stored registration document",
    response_class=Response,
)
async def get_image(
    db: SessionDep,
    admin: AdminDep,
    registration_id: Annotated[int | None, Query(alias="id")] = None,
    kind: Annotated[str | None, Query(alias="type")] = None,
) -> Response:
    """Return the ``cnic`` or ``payment`` image of a registration as raw bytes."""
    if registration_id is None or not kind:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing id or type parameter. Use ?id=1&type=cnic or ?id=1&type=payment",
        )
    try:
        data = load_image(db, registration_id, kind)
    except UnknownImageKind as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=err.message,
        ) from err
    except RegistrationNotFound as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=err.message,
        ) from err
    if not data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found for this registration.",
        )

    return Response(
        content=data,
        media_type=sniff_image_type(data),
        headers={"Cache-Control": "private, max-age=3600"},
    )
