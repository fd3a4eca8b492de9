"""
Module: rent_kernel.models.party
Responsibility: ORM persistence for the people on either side of a lease:
    tenants and landlords.  Both share one table and are told apart by
    ``party_type``.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    A party referenced by any contract cannot be deleted (enforced at the
    service layer via ContractSelector.is_party_referenced, not by the ORM).
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from rent_kernel.db.base import TrackedBase


class Party(TrackedBase):
    """
    Tenant or landlord.

    Guarantees:
        - party_type is "tenant" or "landlord".
        - full_name is never blank (validated upstream).
    """

    __tablename__ = "parties"

    __table_args__ = (
        Index("idx_party_type", "party_type"),
        Index("idx_party_name", "full_name"),
    )

    party_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        doc="tenant or landlord",
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    phone: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        String(4000),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Party {self.party_type}: {self.full_name}>"
