"""
VendorHub Backend — Product Service
=====================================

Products hang off a firm. Adding and deleting require the caller to own
that firm (checked through FirmService.load_owned_firm); listing is public.
"""

import logging
import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vendorhub.exceptions import DatabaseError, ForbiddenError, NotFoundError
from vendorhub.models.firm import Firm
from vendorhub.models.product import Product
from vendorhub.schemas.product import (
    FirmProductsResponse,
    ProductCreate,
    ProductCreatedResponse,
    ProductResponse,
)
from vendorhub.services.file_service import FileService, file_service
from vendorhub.services.firm_service import FirmService, firm_service
from vendorhub.services.vendor_service import parse_id

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, firms: FirmService, files: FileService):
        self.firms = firms
        self.files = files

    async def add_product(
        self,
        db: AsyncSession,
        vendor_id: uuid.UUID,
        firm_id: Union[str, uuid.UUID],
        data: ProductCreate,
        image_name: Optional[str] = None,
        image_content: Optional[bytes] = None,
    ) -> ProductCreatedResponse:
        firm = await self.firms.load_owned_firm(db, vendor_id, firm_id)

        image_path: Optional[str] = None
        if image_content is not None:
            image_path = await self.files.store_upload(image_name, image_content)

        product = Product(
            product_name=data.product_name,
            price=data.price,
            category=list(data.category),
            best_seller=data.best_seller,
            description=data.description,
            image=image_path,
            firm_id=firm.id,
        )
        try:
            db.add(product)
            await db.flush()
        except SQLAlchemyError as e:
            await db.rollback()
            await self.files.cleanup(image_path)
            logger.error("Database error adding product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not add the product. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product %s added to firm %s", product.id, firm.id)
        return ProductCreatedResponse(product=ProductResponse.model_validate(product))

    async def list_products(
        self,
        db: AsyncSession,
        firm_id: Union[str, uuid.UUID],
    ) -> FirmProductsResponse:
        firm = await self.firms.load_firm(db, firm_id, with_products=True)
        return FirmProductsResponse(
            restaurant_name=firm.firm_name,
            products=[ProductResponse.model_validate(p) for p in firm.products],
        )

    async def delete_product(
        self,
        db: AsyncSession,
        vendor_id: uuid.UUID,
        product_id: Union[str, uuid.UUID],
    ) -> None:
        pid = parse_id(product_id, "product")
        try:
            result = await db.execute(
                select(Product)
                .where(Product.id == pid)
                .options(selectinload(Product.firm).selectinload(Firm.vendors))
            )
            product = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", pid, str(e))
            raise DatabaseError(context={"product_id": str(pid)})

        if product is None:
            raise NotFoundError(resource="product", resource_id=str(pid))
        if not any(v.id == vendor_id for v in product.firm.vendors):
            raise ForbiddenError(
                message="You can only manage products of your own firms",
                context={"product_id": str(pid), "vendor_id": str(vendor_id)},
            )

        image = product.image
        try:
            await db.delete(product)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", pid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the product. Please try again.",
                context={"product_id": str(pid)},
            )

        await self.files.cleanup(image)
        logger.info("Product %s deleted by vendor %s", pid, vendor_id)


product_service = ProductService(firms=firm_service, files=file_service)
