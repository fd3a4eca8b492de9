"""
Module: rent_engines.ledger
Responsibility:
    In-memory payment ledger grouped by contract.  Answers "which payments
    belong to this contract" and "how much rent has been paid" without any
    status or balance logic of its own.

Architecture position:
    Engines -- pure, zero I/O.  The ledger is filled from an injected
    ``PaymentSource`` (any object with ``load_all()``), never from global
    state.

Invariants enforced:
    - Payment ids are unique within a ledger.
    - Listings are ordered by payment date ascending; payments on the same
      date keep the order in which they entered the ledger.
    - Payments are never mutated; ``replace`` swaps in a new value.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from rent_kernel.domain.dtos import PaymentInfo
from rent_kernel.exceptions import ValidationError
from rent_kernel.logging_config import get_logger

logger = get_logger("engines.ledger")


class PaymentSource(Protocol):
    """Anything that can hand the ledger every stored payment."""

    def load_all(self) -> Iterable[PaymentInfo]: ...


class PaymentLedger:
    """
    The authoritative in-memory set of payments.

    Contract:
        ``add`` refuses a duplicate id.  ``replace`` and ``remove`` return
        the previous value, or None when the id was unknown; they never
        raise for a missing payment.
    """

    def __init__(self, payments: Iterable[PaymentInfo] = ()):
        self._payments: dict[UUID, PaymentInfo] = {}
        self._sequence: dict[UUID, int] = {}
        self._next_seq = 0
        for payment in payments:
            self.add(payment)

    @classmethod
    def from_source(cls, source: PaymentSource) -> PaymentLedger:
        ledger = cls(source.load_all())
        logger.debug("ledger_loaded", extra={"payment_count": len(ledger)})
        return ledger

    def __len__(self) -> int:
        return len(self._payments)

    def __contains__(self, payment_id: object) -> bool:
        return payment_id in self._payments

    def _sort_key(self, payment: PaymentInfo):
        return (payment.payment_date, self._sequence[payment.id])

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, payment: PaymentInfo) -> None:
        if payment.id in self._payments:
            raise ValidationError("id", f"Payment {payment.id} is already in the ledger")
        self._payments[payment.id] = payment
        self._sequence[payment.id] = self._next_seq
        self._next_seq += 1

    def replace(self, payment: PaymentInfo) -> PaymentInfo | None:
        """Swap in an edited payment.  Unknown ids are added."""
        previous = self._payments.get(payment.id)
        if previous is None:
            self.add(payment)
        else:
            self._payments[payment.id] = payment
        return previous

    def remove(self, payment_id: UUID) -> PaymentInfo | None:
        self._sequence.pop(payment_id, None)
        return self._payments.pop(payment_id, None)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, payment_id: UUID) -> PaymentInfo | None:
        return self._payments.get(payment_id)

    def all(self) -> list[PaymentInfo]:
        return sorted(self._payments.values(), key=self._sort_key)

    def for_contract(self, contract_id: UUID) -> list[PaymentInfo]:
        return [p for p in self.all() if p.contract_id == contract_id]

    def rent_payments(self, contract_id: UUID) -> list[PaymentInfo]:
        return [p for p in self.for_contract(contract_id) if p.is_rent]

    def rent_subtotal(self, contract_id: UUID) -> Decimal:
        """All-time sum of Rent-category payments for the contract."""
        return sum((p.amount for p in self.rent_payments(contract_id)), Decimal("0"))

    def orphans(self) -> list[PaymentInfo]:
        """Payments that reference no contract."""
        return [p for p in self.all() if p.is_orphan]
