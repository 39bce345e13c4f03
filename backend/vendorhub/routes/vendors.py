"""
VendorHub Backend — Vendor Route Handlers
===========================================

What:  /vendor endpoints: register, login, list, single lookup.
How:   Thin handlers; every rule lives in VendorService.

    POST /vendor/register              → 201 {message}
    POST /vendor/login                 → 200 {success, token, vendorId}
    GET  /vendor/all-vendors           → 200 {vendor: [...]}
    GET  /vendor/single-vendor/{id}    → 200 {vendorId, vendorFirmId, vendor}

`populate` (default true) controls whether each vendor's firms come back as
full objects or as bare ids.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.database import get_db_session
from vendorhub.schemas.common import ErrorResponse, MessageResponse
from vendorhub.schemas.vendor import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SingleVendorResponse,
    VendorListResponse,
)
from vendorhub.services.vendor_service import vendor_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendor", tags=["Vendors"])

POPULATE_QUERY = Query(
    default=True,
    description="Embed full firm objects (true) or only firm ids (false)",
)


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Email already taken", "model": ErrorResponse},
        429: {"description": "Too many attempts", "model": ErrorResponse},
    },
    summary="Register a vendor account",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await vendor_service.register(
        db=db,
        user_name=body.user_name,
        email=body.email,
        password=body.password,
    )
    return MessageResponse(message="Vendor registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"description": "Invalid email or password", "model": ErrorResponse},
        429: {"description": "Too many attempts", "model": ErrorResponse},
    },
    summary="Log in and receive a bearer token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await vendor_service.login(db=db, email=body.email, password=body.password)


@router.get(
    "/all-vendors",
    response_model=VendorListResponse,
    summary="List every vendor with its firms",
)
async def all_vendors(
    populate: bool = POPULATE_QUERY,
    db: AsyncSession = Depends(get_db_session),
) -> VendorListResponse:
    return await vendor_service.list_vendors(db=db, populate=populate)


@router.get(
    "/single-vendor/{vendor_id}",
    response_model=SingleVendorResponse,
    responses={
        400: {"description": "Malformed vendor id", "model": ErrorResponse},
        404: {"description": "Vendor not found", "model": ErrorResponse},
    },
    summary="Get one vendor with its firms",
)
async def single_vendor(
    vendor_id: str,
    populate: bool = POPULATE_QUERY,
    db: AsyncSession = Depends(get_db_session),
) -> SingleVendorResponse:
    # vendor_id stays a str so malformed ids reach the service and become 400, not 422
    return await vendor_service.get_vendor(db=db, vendor_id=vendor_id, populate=populate)
