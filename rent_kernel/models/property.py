"""
Module: rent_kernel.models.property
Responsibility: ORM persistence for rentable properties.  The ``price``
    column is the asking monthly rent and is offered as the default rent
    to the proration calculator.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from decimal import Decimal

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from rent_kernel.db.base import TrackedBase


class Property(TrackedBase):
    """Rentable property.  ``area`` and ``price`` are positive (validated upstream)."""

    __tablename__ = "properties"

    __table_args__ = (
        Index("idx_property_title", "title"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    address: Mapped[str] = mapped_column(String(500), nullable=False)

    area: Mapped[Decimal] = mapped_column(nullable=False, doc="Floor area")

    price: Mapped[Decimal] = mapped_column(nullable=False, doc="Monthly rent")

    notes: Mapped[str | None] = mapped_column(String(4000), nullable=True)

    def __repr__(self) -> str:
        return f"<Property {self.title} ({self.address})>"
