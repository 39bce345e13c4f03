"""
VendorHub Backend — Vendor Service
====================================

What:  Registration, login and vendor lookups.
How:   Stateless; every call receives the request's AsyncSession. The
       password hasher and token service are injected at construction.
Who:   /vendor routes; FirmService uses load_vendor() for ownership.

Registration and the duplicate-email race:
    There is no "SELECT by email, then INSERT" step. The vendor row is
    inserted straight away and the unique index on `vendors.email` decides:
    if another request got there first the flush fails with IntegrityError,
    which becomes DuplicateEmailError. Two concurrent registrations with the
    same email therefore cannot both succeed.

Firm resolution ("populate"):
    Listing and single-vendor reads load the vendor's firms with
    selectinload(): one extra SELECT ... WHERE vendor_id IN (...) for the
    whole result, no N+1. Without populate only firm ids are loaded.
"""

import logging
import uuid
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vendorhub.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidIdError,
    NotFoundError,
)
from vendorhub.models.firm import Firm
from vendorhub.models.vendor import Vendor
from vendorhub.schemas.vendor import (
    LoginResponse,
    SingleVendorResponse,
    VendorListResponse,
    VendorResponse,
)
from vendorhub.services.security import (
    PasswordHasher,
    TokenService,
    password_hasher,
    token_service,
)

logger = logging.getLogger(__name__)


def parse_id(raw_id: Union[str, uuid.UUID], resource: str) -> uuid.UUID:
    """Turn a path parameter into a UUID or raise InvalidIdError (400)."""
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        raise InvalidIdError(resource=resource, raw_id=str(raw_id))


def firms_option(populate: bool):
    """Loader option for Vendor.firms: full firm rows, or ids only."""
    if populate:
        return selectinload(Vendor.firms)
    return selectinload(Vendor.firms).load_only(Firm.id)


class VendorService:
    """Business logic for vendor accounts."""

    def __init__(self, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self,
        db: AsyncSession,
        user_name: str,
        email: str,
        password: str,
    ) -> Vendor:
        """
        Create a vendor account.

        Raises:
            DuplicateEmailError: email already registered (400)
            DatabaseError: any other database failure (500)
        """
        hashed = await self.hasher.hash_async(password)
        vendor = Vendor(user_name=user_name, email=email, password=hashed, firms=[])

        db.add(vendor)
        try:
            await db.flush()
        except IntegrityError:
            # The failed flush leaves the transaction unusable; nothing else
            # was written in it, so roll the whole thing back
            await db.rollback()
            logger.info("Registration rejected: email already taken")
            raise DuplicateEmailError(email=email)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error registering vendor: %s", str(e))
            raise DatabaseError(
                message="Could not register the vendor. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Vendor registered: %s", vendor.id)
        return vendor

    async def login(self, db: AsyncSession, email: str, password: str) -> LoginResponse:
        """
        Check credentials and issue a bearer token.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        try:
            result = await db.execute(select(Vendor).where(Vendor.email == email))
            vendor = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if vendor is None:
            # Burn a hash comparison anyway so response time does not reveal
            # whether the email exists
            await self.hasher.verify_async(password, _DUMMY_HASH)
            raise InvalidCredentialsError(context={"reason": "unknown_email"})

        if not await self.hasher.verify_async(password, vendor.password):
            raise InvalidCredentialsError(context={"reason": "bad_password"})

        token = self.tokens.issue(vendor.id)
        logger.info("Vendor %s logged in", vendor.id)
        return LoginResponse(token=token, vendor_id=vendor.id)

    async def load_vendor(
        self,
        db: AsyncSession,
        vendor_id: Union[str, uuid.UUID],
        populate: bool = True,
    ) -> Vendor:
        """Fetch one vendor with its firms loaded, or raise NotFoundError."""
        vid = parse_id(vendor_id, "vendor")
        try:
            result = await db.execute(
                select(Vendor).where(Vendor.id == vid).options(firms_option(populate))
            )
            vendor = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching vendor %s: %s", vid, str(e))
            raise DatabaseError(
                message="Could not retrieve the vendor. Please try again.",
                context={"vendor_id": str(vid)},
            )

        if vendor is None:
            raise NotFoundError(resource="vendor", resource_id=str(vid))
        return vendor

    async def list_vendors(self, db: AsyncSession, populate: bool = True) -> VendorListResponse:
        """Every vendor, oldest first. Unbounded by design of the API."""
        try:
            result = await db.execute(
                select(Vendor).options(firms_option(populate)).order_by(Vendor.created_at)
            )
            vendors: List[Vendor] = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing vendors: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve vendors. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return VendorListResponse(
            vendor=[VendorResponse.from_vendor(v, populate=populate) for v in vendors]
        )

    async def get_vendor(
        self,
        db: AsyncSession,
        vendor_id: Union[str, uuid.UUID],
        populate: bool = True,
    ) -> SingleVendorResponse:
        vendor = await self.load_vendor(db, vendor_id, populate=populate)
        first_firm: Optional[uuid.UUID] = vendor.firms[0].id if vendor.firms else None
        return SingleVendorResponse(
            vendor_id=vendor.id,
            vendor_firm_id=first_firm,
            vendor=VendorResponse.from_vendor(vendor, populate=populate),
        )


# Valid bcrypt hash of a random string, compared against on unknown emails
_DUMMY_HASH = password_hasher.hash(uuid.uuid4().hex)

vendor_service = VendorService(hasher=password_hasher, tokens=token_service)
