"""
VendorHub Backend — Product SQLAlchemy Model
==============================================

A menu item belonging to exactly one firm. Rows are removed with their firm
(ORM cascade plus ON DELETE CASCADE on the foreign key).
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.database import Base

if TYPE_CHECKING:
    from vendorhub.models.firm import Firm


class Product(Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    category: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    best_seller: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    firm_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("firms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    firm: Mapped["Firm"] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, product_name='{self.product_name}')>"
