"""
VendorHub Backend — Vendor SQLAlchemy Model
=============================================

What:  ORM model for the `vendors` table plus the vendor↔firm association.
Who:   VendorService (register, login, listing), FirmService (ownership checks),
       Alembic (schema management).

Table Design Rationale:
    - UUID primary key: opaque, not guessable, generated in Python so the
      value is known right after flush
    - email: UNIQUE index; the database constraint is what keeps two
      concurrent registrations from both succeeding
    - password: bcrypt hash only; the plaintext never reaches this table
    - firms: many-to-many through `vendor_firms`, loaded on demand with
      selectinload() (see vendor_service.firms_option)
"""

import uuid
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.database import Base

if TYPE_CHECKING:
    from vendorhub.models.firm import Firm


vendor_firms = Table(
    "vendor_firms",
    Base.metadata,
    Column("vendor_id", Uuid, ForeignKey("vendors.id", ondelete="CASCADE"), primary_key=True),
    Column("firm_id", Uuid, ForeignKey("firms.id", ondelete="CASCADE"), primary_key=True),
)


class Vendor(Base):
    """
    A registered account.

    Lifecycle:
        Created by POST /vendor/register. There is no update or delete path;
        the only later change is gaining firms through POST /firm/add-firm.
    """

    __tablename__ = "vendors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)

    # bcrypt output is 60 chars; extra room for a future scheme change
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    firms: Mapped[List["Firm"]] = relationship(
        secondary=vendor_firms,
        back_populates="vendors",
        order_by="Firm.created_at",
    )

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<Vendor(id={self.id}, email='{self.email}')>"
