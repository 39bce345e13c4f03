"""
VendorHub Backend — Vendor Request/Response Schemas
=====================================================

What:  API contract for registration, login and vendor listing.
Why:   Strict input validation and a response shape that can never leak the
       password hash (it is simply not a field here).

Firm resolution:
    `VendorResponse.firm` holds full FirmResponse objects when the query was
    populated, and bare firm UUIDs otherwise. `from_vendor()` picks the form.
"""

import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import EmailStr, Field

from vendorhub.models.vendor import Vendor
from vendorhub.schemas.common import CamelModel
from vendorhub.schemas.firm import FirmResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    """Body of POST /vendor/register. No password strength rules beyond non-empty."""
    user_name: str = Field(min_length=1, max_length=255, description="Display name")
    email: EmailStr
    password: str = Field(min_length=1, description="Plaintext password (hashed before storage)")


class LoginRequest(CamelModel):
    # Plain str: a malformed email is just an unknown account (401), not a 400
    email: str = Field(max_length=320)
    password: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class LoginResponse(CamelModel):
    """Login always issues a token; there is no token-less success."""
    success: str = "Login successful"
    token: str = Field(description="Bearer token for the Authorization header")
    vendor_id: uuid.UUID


class VendorResponse(CamelModel):
    id: uuid.UUID
    user_name: str
    email: str
    created_at: datetime
    firm: List[Union[FirmResponse, uuid.UUID]] = Field(default_factory=list)

    @classmethod
    def from_vendor(cls, vendor: Vendor, populate: bool = True) -> "VendorResponse":
        """
        Build the response for a vendor whose `firms` collection is loaded.

        populate=True embeds every firm; populate=False keeps only the ids.
        """
        if populate:
            firms: List[Union[FirmResponse, uuid.UUID]] = [
                FirmResponse.model_validate(firm) for firm in vendor.firms
            ]
        else:
            firms = [firm.id for firm in vendor.firms]
        return cls(
            id=vendor.id,
            user_name=vendor.user_name,
            email=vendor.email,
            created_at=vendor.created_at,
            firm=firms,
        )


class VendorListResponse(CamelModel):
    vendor: List[VendorResponse]


class SingleVendorResponse(CamelModel):
    vendor_id: uuid.UUID
    vendor_firm_id: Optional[uuid.UUID] = Field(
        default=None, description="ID of the vendor's first firm, null when it has none"
    )
    vendor: VendorResponse
