"""
Module: rent_kernel.models.contract
Responsibility: ORM persistence for lease contracts between a tenant, a
    landlord and a property.  The lifecycle status is stored as a kind
    column plus a nullable debt amount, never as display text.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - debt_amount is non-NULL exactly when status_kind is "debt" (enforced
      by ContractStatus at the service boundary).
    - status_kind is written only by the status policy, via
      RentLedgerService; structural edits never set it directly.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rent_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from rent_kernel.models.party import Party
    from rent_kernel.models.property import Property


class Contract(TrackedBase):
    """
    Lease contract.

    Guarantees:
        - tenant, landlord and property references are NOT NULL.
        - monthly_rent is positive (validated upstream).

    Non-goals:
        - end_date >= start_date is not a database constraint; the service
          layer enforces it when configured to.
    """

    __tablename__ = "contracts"

    __table_args__ = (
        Index("idx_contract_status", "status_kind"),
        Index("idx_contract_tenant", "tenant_id"),
        Index("idx_contract_landlord", "landlord_id"),
        Index("idx_contract_property", "property_id"),
    )

    # =========================================================================
    # Parties and property
    # =========================================================================

    tenant_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("parties.id"),
        nullable=False,
    )

    landlord_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("parties.id"),
        nullable=False,
    )

    property_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("properties.id"),
        nullable=False,
    )

    tenant: Mapped["Party"] = relationship(
        "Party",
        foreign_keys=[tenant_id],
        lazy="selectin",
    )

    landlord: Mapped["Party"] = relationship(
        "Party",
        foreign_keys=[landlord_id],
        lazy="selectin",
    )

    rented_property: Mapped["Property"] = relationship(
        "Property",
        foreign_keys=[property_id],
        lazy="selectin",
    )

    # =========================================================================
    # Term and rent
    # =========================================================================

    start_date: Mapped[date] = mapped_column(Date, nullable=False)

    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    monthly_rent: Mapped[Decimal] = mapped_column(nullable=False)

    # =========================================================================
    # Derived status
    # =========================================================================

    status_kind: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        doc="active, completed, paid_in_full or debt",
    )

    debt_amount: Mapped[Decimal | None] = mapped_column(
        nullable=True,
        doc="Outstanding amount when status_kind is debt",
    )

    def __repr__(self) -> str:
        return f"<Contract {self.id} {self.start_date}..{self.end_date} {self.status_kind}>"
