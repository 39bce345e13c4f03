"""
VendorHub Backend — Firm Service
==================================

What:  Create, read and delete firms; link new firms to the creating vendor.
Who:   /firm routes. ProductService reuses load_owned_firm().

Ownership:
    A vendor may only delete firms it is linked to, and only add products to
    those firms. Anyone may read.

Image handling:
    The route hands over the raw upload (if any). The file is written first;
    if the database work then fails, the stored file is removed again before
    the error propagates.
"""

import logging
import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vendorhub.exceptions import (
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from vendorhub.models.firm import Firm
from vendorhub.schemas.firm import (
    FirmCreate,
    FirmCreatedResponse,
    FirmListResponse,
    FirmResponse,
    SingleFirmResponse,
)
from vendorhub.services.file_service import FileService, file_service
from vendorhub.services.vendor_service import VendorService, parse_id, vendor_service

logger = logging.getLogger(__name__)


class FirmService:

    def __init__(self, vendors: VendorService, files: FileService):
        self.vendors = vendors
        self.files = files

    async def add_firm(
        self,
        db: AsyncSession,
        vendor_id: uuid.UUID,
        data: FirmCreate,
        image_name: Optional[str] = None,
        image_content: Optional[bytes] = None,
    ) -> FirmCreatedResponse:
        """
        Create a firm owned by `vendor_id`.

        Raises:
            NotFoundError: the token's vendor no longer exists
            ValidationError: duplicate firm name, or a bad image
        """
        vendor = await self.vendors.load_vendor(db, vendor_id)

        image_path: Optional[str] = None
        if image_content is not None:
            image_path = await self.files.store_upload(image_name, image_content)

        firm = Firm(
            firm_name=data.firm_name,
            area=data.area,
            category=list(data.category),
            region=list(data.region),
            offer=data.offer,
            image=image_path,
            products=[],
        )
        try:
            db.add(firm)
            vendor.firms.append(firm)
            await db.flush()
        except IntegrityError:
            await db.rollback()
            await self.files.cleanup(image_path)
            raise ValidationError(
                message=f"A firm named '{data.firm_name}' already exists",
                field="firmName",
            )
        except SQLAlchemyError as e:
            await db.rollback()
            await self.files.cleanup(image_path)
            logger.error("Database error adding firm: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not add the firm. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Firm %s added by vendor %s", firm.id, vendor.id)
        return FirmCreatedResponse(firm_id=firm.id, firm=FirmResponse.model_validate(firm))

    async def list_firms(self, db: AsyncSession) -> FirmListResponse:
        try:
            result = await db.execute(select(Firm).order_by(Firm.created_at))
            firms = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing firms: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve firms. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return FirmListResponse(firms=[FirmResponse.model_validate(f) for f in firms])

    async def load_firm(
        self,
        db: AsyncSession,
        firm_id: Union[str, uuid.UUID],
        with_products: bool = False,
    ) -> Firm:
        fid = parse_id(firm_id, "firm")
        query = select(Firm).where(Firm.id == fid).options(selectinload(Firm.vendors))
        if with_products:
            query = query.options(selectinload(Firm.products))
        try:
            result = await db.execute(query)
            firm = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching firm %s: %s", fid, str(e))
            raise DatabaseError(
                message="Could not retrieve the firm. Please try again.",
                context={"firm_id": str(fid)},
            )
        if firm is None:
            raise NotFoundError(resource="firm", resource_id=str(fid))
        return firm

    async def load_owned_firm(
        self,
        db: AsyncSession,
        vendor_id: uuid.UUID,
        firm_id: Union[str, uuid.UUID],
        with_products: bool = False,
    ) -> Firm:
        """Like load_firm(), but ForbiddenError unless `vendor_id` owns it."""
        firm = await self.load_firm(db, firm_id, with_products=with_products)
        if not any(v.id == vendor_id for v in firm.vendors):
            raise ForbiddenError(
                message="You can only manage your own firms",
                context={"firm_id": str(firm.id), "vendor_id": str(vendor_id)},
            )
        return firm

    async def get_firm(self, db: AsyncSession, firm_id: Union[str, uuid.UUID]) -> SingleFirmResponse:
        firm = await self.load_firm(db, firm_id)
        return SingleFirmResponse(firm=FirmResponse.model_validate(firm))

    async def delete_firm(
        self,
        db: AsyncSession,
        vendor_id: uuid.UUID,
        firm_id: Union[str, uuid.UUID],
    ) -> None:
        """Delete an owned firm together with its products and their images."""
        firm = await self.load_owned_firm(db, vendor_id, firm_id, with_products=True)
        images = [firm.image] + [p.image for p in firm.products]

        try:
            await db.delete(firm)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting firm %s: %s", firm.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the firm. Please try again.",
                context={"firm_id": str(firm.id)},
            )

        for image in images:
            await self.files.cleanup(image)
        logger.info("Firm %s deleted by vendor %s", firm.id, vendor_id)


firm_service = FirmService(vendors=vendor_service, files=file_service)
