"""
VendorHub Backend — Firm Schemas
==================================

Input DTO for firm creation (assembled from multipart form fields by the
route) and the response shapes for the /firm endpoints.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from vendorhub.schemas.common import CamelModel


class FirmCreate(CamelModel):
    firm_name: str = Field(min_length=1, max_length=255)
    area: str = Field(min_length=1, max_length=255)
    category: List[str] = Field(default_factory=list, description="e.g. veg, non-veg")
    region: List[str] = Field(default_factory=list, description="e.g. south-indian, chinese")
    offer: Optional[str] = Field(default=None, max_length=255)


class FirmResponse(CamelModel):
    """A firm as embedded in vendor responses and returned by /firm reads."""
    id: uuid.UUID
    firm_name: str
    area: str
    category: List[str]
    region: List[str]
    offer: Optional[str] = None
    image: Optional[str] = Field(default=None, description="Public /uploads/ path of the firm image")
    created_at: datetime


class FirmCreatedResponse(CamelModel):
    message: str = "Firm added successfully"
    firm_id: uuid.UUID
    firm: FirmResponse


class FirmListResponse(CamelModel):
    firms: List[FirmResponse]


class SingleFirmResponse(CamelModel):
    firm: FirmResponse
