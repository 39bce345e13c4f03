"""
VendorHub Backend — Product Route Handlers
============================================

    POST   /product/add-product/{firmId}  → 201 {message, product}   (owner only)
    GET    /product/{firmId}/products     → 200 {restaurantName, products}
    DELETE /product/{productId}           → 200 {message}            (owner only)
"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.database import get_db_session
from vendorhub.middleware.auth import require_vendor
from vendorhub.routes.firms import read_image
from vendorhub.schemas.common import ErrorResponse, MessageResponse, validate_form
from vendorhub.schemas.product import (
    FirmProductsResponse,
    ProductCreate,
    ProductCreatedResponse,
)
from vendorhub.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/product", tags=["Products"])


@router.post(
    "/add-product/{firm_id}",
    status_code=201,
    response_model=ProductCreatedResponse,
    responses={
        400: {"description": "Invalid fields or bad image", "model": ErrorResponse},
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Firm belongs to another vendor", "model": ErrorResponse},
        404: {"description": "Firm not found", "model": ErrorResponse},
    },
    summary="Add a product to an owned firm",
)
async def add_product(
    firm_id: str,
    product_name: str = Form(..., alias="productName"),
    price: str = Form(...),
    category: List[str] = Form(default=[]),
    best_seller: bool = Form(default=False, alias="bestSeller"),
    description: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="Product image (optional)"),
    vendor_id: uuid.UUID = Depends(require_vendor),
    db: AsyncSession = Depends(get_db_session),
) -> ProductCreatedResponse:
    data = validate_form(
        ProductCreate,
        product_name=product_name.strip(),
        price=price.strip(),
        category=category,
        best_seller=best_seller,
        description=description or None,
    )
    image_name, image_content = await read_image(image)
    return await product_service.add_product(
        db=db,
        vendor_id=vendor_id,
        firm_id=firm_id,
        data=data,
        image_name=image_name,
        image_content=image_content,
    )


@router.get(
    "/{firm_id}/products",
    response_model=FirmProductsResponse,
    responses={
        400: {"description": "Malformed firm id", "model": ErrorResponse},
        404: {"description": "Firm not found", "model": ErrorResponse},
    },
    summary="List the products of a firm",
)
async def firm_products(firm_id: str, db: AsyncSession = Depends(get_db_session)) -> FirmProductsResponse:
    return await product_service.list_products(db, firm_id)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
        403: {"description": "Product belongs to another vendor's firm", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Delete a product of an owned firm",
)
async def delete_product(
    product_id: str,
    vendor_id: uuid.UUID = Depends(require_vendor),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete_product(db=db, vendor_id=vendor_id, product_id=product_id)
    return MessageResponse(message="Product deleted successfully")
