"""
Service layer for payments.

Persists, loads and deletes payments and returns PaymentInfo DTOs.  A
payment's contract reference is optional.  Status recalculation after a
payment mutation is the caller's job (see RentLedgerService).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from rent_kernel.domain.dtos import PaymentCategory, PaymentInfo
from rent_kernel.domain.validation import optional_text, require_amount, require_date
from rent_kernel.exceptions import ContractNotFoundError, PaymentNotFoundError
from rent_kernel.logging_config import get_logger
from rent_kernel.models.contract import Contract
from rent_kernel.models.payment import Payment
from rent_kernel.selectors.mapping import payment_to_info
from rent_kernel.selectors.payment_selector import PaymentSelector
from rent_kernel.services.base import BaseService

logger = get_logger("services.payment")

UNCHANGED = object()
"""Sentinel for ``update_payment(contract_id=...)``: None means detach."""


class PaymentService(BaseService[Payment]):
    """Service for managing payments."""

    model = Payment
    not_found = PaymentNotFoundError

    def _require_contract(self, contract_id: UUID | None) -> None:
        if contract_id is not None:
            self._load(Contract, contract_id, ContractNotFoundError)

    def get_by_id(self, payment_id: UUID) -> PaymentInfo:
        """
        Get payment by ID.

        Raises:
            PaymentNotFoundError: If payment doesn't exist.
        """
        return payment_to_info(self._get_by_id(payment_id))

    def load_all(self) -> list[PaymentInfo]:
        return PaymentSelector(self.session).load_all()

    def for_contract(self, contract_id: UUID) -> list[PaymentInfo]:
        return PaymentSelector(self.session).for_contract(contract_id)

    def search(self, query: str | None = None) -> list[PaymentInfo]:
        """Search by category, notes, tenant name or property title."""
        return PaymentSelector(self.session).search(query)

    def add_payment(
        self,
        contract_id: UUID | None,
        payment_date: date,
        amount: Decimal,
        category: PaymentCategory | str,
        notes: str | None = None,
    ) -> PaymentInfo:
        """
        Record a payment.

        Raises:
            ValidationError: Missing date, non-positive amount.
            InvalidCategoryError: Unknown category.
            ContractNotFoundError: contract_id given but unknown.
        """
        self._require_contract(contract_id)
        payment = Payment(
            contract_id=contract_id,
            payment_date=require_date(payment_date, "payment_date"),
            amount=require_amount(amount, "amount"),
            category=PaymentCategory.parse(category).value,
            notes=optional_text(notes),
        )
        self.session.add(payment)
        self.session.flush()
        logger.info(
            "payment_added",
            extra={
                "payment_id": str(payment.id),
                "contract_id": str(contract_id) if contract_id else None,
                "amount": payment.amount,
                "category": payment.category,
            },
        )
        return payment_to_info(payment)

    def update_payment(
        self,
        payment_id: UUID,
        contract_id=UNCHANGED,
        payment_date: date | None = None,
        amount: Decimal | None = None,
        category: PaymentCategory | str | None = None,
        notes: str | None = None,
    ) -> PaymentInfo:
        """
        Edit a payment.  Only the fields given are changed; pass
        ``contract_id=None`` to turn the payment into an orphan.
        """
        payment = self._get_by_id(payment_id)

        if contract_id is not UNCHANGED:
            self._require_contract(contract_id)
            payment.contract_id = contract_id
        if payment_date is not None:
            payment.payment_date = require_date(payment_date, "payment_date")
        if amount is not None:
            payment.amount = require_amount(amount, "amount")
        if category is not None:
            payment.category = PaymentCategory.parse(category).value
        if notes is not None:
            payment.notes = optional_text(notes)

        self.session.flush()
        # contract_id may have changed under a loaded relationship
        self.session.expire(payment, ["contract"])
        logger.info("payment_updated", extra={"payment_id": str(payment.id)})
        return payment_to_info(payment)

    def delete_payment(self, payment_id: UUID) -> PaymentInfo:
        """
        Delete a payment.

        Returns:
            The deleted payment, so the caller knows which contract it
            belonged to.
        """
        payment = self._get_by_id(payment_id)
        info = payment_to_info(payment)
        self.session.delete(payment)
        self.session.flush()
        logger.info(
            "payment_deleted",
            extra={"payment_id": str(payment_id), "amount": info.amount},
        )
        return info
