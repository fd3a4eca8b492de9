"""
Module: rent_kernel.models.payment
Responsibility: ORM persistence for payments.  A payment optionally belongs
    to one contract; payments without a contract (orphans) are allowed.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rent_kernel.db.base import TrackedBase, UUIDString

if TYPE_CHECKING:
    from rent_kernel.models.contract import Contract


class Payment(TrackedBase):
    """
    A single payment.

    Guarantees:
        - amount is positive (validated upstream).
        - category is one of Rent, Utilities, Penalty, Deposit.
    """

    __tablename__ = "payments"

    __table_args__ = (
        Index("idx_payment_contract_date", "contract_id", "payment_date"),
        Index("idx_payment_category", "category"),
    )

    contract_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("contracts.id"),
        nullable=True,
    )

    contract: Mapped["Contract | None"] = relationship(
        "Contract",
        foreign_keys=[contract_id],
        lazy="selectin",
    )

    payment_date: Mapped[date] = mapped_column(Date, nullable=False)

    amount: Mapped[Decimal] = mapped_column(nullable=False)

    category: Mapped[str] = mapped_column(String(20), nullable=False)

    notes: Mapped[str | None] = mapped_column(String(4000), nullable=True)

    def __repr__(self) -> str:
        return f"<Payment {self.payment_date} {self.amount} {self.category}>"
