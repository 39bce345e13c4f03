"""
VendorHub Backend — Firm SQLAlchemy Model
===========================================

A firm (restaurant) owned by one or more vendors and holding products.
`category` and `region` are short tag lists stored as JSON so the same model
works on PostgreSQL and SQLite.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import JSON, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.database import Base
from vendorhub.models.vendor import vendor_firms

if TYPE_CHECKING:
    from vendorhub.models.product import Product
    from vendorhub.models.vendor import Vendor


class Firm(Base):
    __tablename__ = "firms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    firm_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    area: Mapped[str] = mapped_column(String(255), nullable=False)

    # e.g. ["veg", "non-veg"]
    category: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # e.g. ["south-indian", "chinese"]
    region: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    offer: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Public path (/uploads/<name>) of the firm image, if one was uploaded
    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    vendors: Mapped[List["Vendor"]] = relationship(
        secondary=vendor_firms,
        back_populates="firms",
    )

    products: Mapped[List["Product"]] = relationship(
        back_populates="firm",
        cascade="all, delete-orphan",
        order_by="Product.created_at",
    )

    def __repr__(self) -> str:
        return f"<Firm(id={self.id}, firm_name='{self.firm_name}')>"
