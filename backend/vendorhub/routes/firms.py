"""
VendorHub Backend — Firm Route Handlers
=========================================

What:  /firm endpoints: create (multipart, authenticated), list, read, delete.
How:   Form fields are collected here and validated into `FirmCreate`; the
       optional image is read into memory (bounded by MAX_UPLOAD_SIZE in
       FileService) and handed to FirmService with the rest.

Request Flow (POST /firm/add-firm):
    1. `require_vendor` verifies the bearer token → vendor id
    2. Form fields → FirmCreate (400 on bad input)
    3. FirmService: load vendor → store image → insert firm + link
    4. 201 {message, firmId, firm}
"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.database import get_db_session
from vendorhub.middleware.auth import require_vendor
from vendorhub.schemas.common import ErrorResponse, MessageResponse, validate_form
from vendorhub.schemas.firm import (
    FirmCreate,
    FirmCreatedResponse,
    FirmListResponse,
    SingleFirmResponse,
)
from vendorhub.services.firm_service import firm_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/firm", tags=["Firms"])


async def read_image(image: Optional[UploadFile]):
    """Return (filename, bytes) of an uploaded image, or (None, None) when absent."""
    # Browsers send an empty, unnamed part when no file was picked
    if image is None or not image.filename:
        return None, None
    try:
        content = await image.read()
    finally:
        await image.close()
    logger.info("Received image upload: filename=%s, size=%d bytes", image.filename, len(content))
    return image.filename, content


@router.post(
    "/add-firm",
    status_code=201,
    response_model=FirmCreatedResponse,
    responses={
        400: {"description": "Invalid fields, duplicate firm name or bad image", "model": ErrorResponse},
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        404: {"description": "Vendor not found", "model": ErrorResponse},
    },
    summary="Create a firm owned by the logged-in vendor",
)
async def add_firm(
    firm_name: str = Form(..., alias="firmName"),
    area: str = Form(...),
    category: List[str] = Form(default=[]),
    region: List[str] = Form(default=[]),
    offer: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="Firm image (optional)"),
    vendor_id: uuid.UUID = Depends(require_vendor),
    db: AsyncSession = Depends(get_db_session),
) -> FirmCreatedResponse:
    data = validate_form(
        FirmCreate,
        firm_name=firm_name.strip(),
        area=area.strip(),
        category=category,
        region=region,
        offer=offer or None,
    )
    image_name, image_content = await read_image(image)
    return await firm_service.add_firm(
        db=db,
        vendor_id=vendor_id,
        data=data,
        image_name=image_name,
        image_content=image_content,
    )


@router.get("/all-firms", response_model=FirmListResponse, summary="List every firm")
async def all_firms(db: AsyncSession = Depends(get_db_session)) -> FirmListResponse:
    return await firm_service.list_firms(db)


@router.get(
    "/single-firm/{firm_id}",
    response_model=SingleFirmResponse,
    responses={
        400: {"description": "Malformed firm id", "model": ErrorResponse},
        404: {"description": "Firm not found", "model": ErrorResponse},
    },
    summary="Get one firm",
)
async def single_firm(firm_id: str, db: AsyncSession = Depends(get_db_session)) -> SingleFirmResponse:
    return await firm_service.get_firm(db, firm_id)


@router.delete(
    "/{firm_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Firm belongs to another vendor", "model": ErrorResponse},
        404: {"description": "Firm not found", "model": ErrorResponse},
    },
    summary="Delete an owned firm with its products",
)
async def delete_firm(
    firm_id: str,
    vendor_id: uuid.UUID = Depends(require_vendor),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await firm_service.delete_firm(db=db, vendor_id=vendor_id, firm_id=firm_id)
    return MessageResponse(message="Firm deleted successfully")
