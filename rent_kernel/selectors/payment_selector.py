"""
Module: rent_kernel.selectors.payment_selector
Responsibility: Read-only payment queries.  ``load_all()`` makes this
    selector a payment source for the in-memory PaymentLedger.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/ and selectors/.  MUST NOT import from services/ or outer layers.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from rent_kernel.domain.dtos import PaymentInfo
from rent_kernel.models.payment import Payment
from rent_kernel.selectors.base import BaseSelector, matches
from rent_kernel.selectors.mapping import payment_to_info


class PaymentSelector(BaseSelector[Payment]):
    """Selector for payment queries.  All listings are date ascending."""

    def __init__(self, session: Session):
        super().__init__(session)

    def _ordered(self):
        return select(Payment).order_by(Payment.payment_date, Payment.created_at, Payment.id)

    def get(self, payment_id: UUID) -> PaymentInfo | None:
        payment = self.session.get(Payment, payment_id)
        return payment_to_info(payment) if payment is not None else None

    def load_all(self) -> list[PaymentInfo]:
        """Every payment, orphans included."""
        return [payment_to_info(p) for p in self.session.execute(self._ordered()).scalars()]

    def for_contract(self, contract_id: UUID) -> list[PaymentInfo]:
        stmt = self._ordered().where(Payment.contract_id == contract_id)
        return [payment_to_info(p) for p in self.session.execute(stmt).scalars()]

    def search(self, query: str | None = None) -> list[PaymentInfo]:
        """
        Find payments by category, notes, tenant name or property title.

        A blank query returns every payment.
        """
        results = []
        for payment in self.session.execute(self._ordered()).scalars():
            contract = payment.contract
            tenant_name = None
            property_title = None
            if contract is not None:
                tenant_name = contract.tenant.full_name if contract.tenant else None
                property_title = (
                    contract.rented_property.title if contract.rented_property else None
                )
            if matches(query, payment.category, payment.notes, tenant_name, property_title):
                results.append(payment_to_info(payment))
        return results
