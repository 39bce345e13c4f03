"""
VendorHub Backend — Product Schemas
=====================================
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from vendorhub.schemas.common import CamelModel


class ProductCreate(CamelModel):
    product_name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    category: List[str] = Field(default_factory=list)
    best_seller: bool = False
    description: Optional[str] = None


class ProductResponse(CamelModel):
    id: uuid.UUID
    product_name: str
    price: Decimal
    category: List[str]
    best_seller: bool
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime
    firm_id: uuid.UUID


class ProductCreatedResponse(CamelModel):
    message: str = "Product added successfully"
    product: ProductResponse


class FirmProductsResponse(CamelModel):
    """Response of GET /product/{firmId}/products."""
    restaurant_name: str = Field(description="Name of the firm the products belong to")
    products: List[ProductResponse]
