"""
Module: rent_engines.contract_status
Responsibility:
    Derive a contract's lifecycle status from its term and its rent
    payments.  Two entry points exist and they are deliberately not the
    same function:

    A. ``on_contract_structural_change`` runs after a contract is created or
       edited (and over every contract on start-up).  It only checks expiry.
    B. ``on_payment_change`` runs after a payment is added, edited or
       deleted.  It checks expiry and then settles PaidInFull vs Debt.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  The current date is an
    explicit ``as_of`` argument; this module never reads a clock.

Invariants enforced:
    - Completed is terminal.  Entry point B returns it unchanged; entry
      point A can only move a contract towards Completed.
    - Debt always carries a strictly positive amount.
    - Paid rent is the all-time sum of the contract's Rent payments
      compared against one month's rent.

State machine:
    Active --(end < as_of, A or B)--> Completed
    Active/PaidInFull/Debt --(B, paid >= rent)--> PaidInFull
    Active/PaidInFull/Debt --(B, paid < rent)--> Debt(rent - paid)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from rent_engines.balance import paid_rent_total
from rent_engines.tracer import traced_engine
from rent_kernel.domain.dtos import ContractInfo, PaymentInfo
from rent_kernel.domain.status import ContractStatus, StatusKind
from rent_kernel.domain.validation import require_date
from rent_kernel.logging_config import get_logger

logger = get_logger("engines.contract_status")


class ContractStatusPolicy:
    """
    Stateless status policy.

    Both entry points return the new status; persisting it is the caller's
    job.
    """

    @traced_engine(
        "contract_status.structural",
        "1.0",
        fingerprint_fields=("contract", "as_of"),
    )
    def on_contract_structural_change(
        self,
        contract: ContractInfo,
        as_of: date,
    ) -> ContractStatus:
        """
        Entry point A: expiry check only.

        Returns Completed when the end date has passed, otherwise the
        current status unchanged.  Paid/debt is not re-evaluated here.
        """
        as_of = require_date(as_of, "as_of")
        if contract.end_date < as_of:
            new_status = ContractStatus.completed()
        else:
            new_status = contract.status
        self._log_transition(contract, new_status, "structural_change")
        return new_status

    @traced_engine(
        "contract_status.payment",
        "1.0",
        fingerprint_fields=("contract", "rent_payments", "as_of"),
    )
    def on_payment_change(
        self,
        contract: ContractInfo,
        rent_payments: Iterable[PaymentInfo],
        as_of: date,
    ) -> ContractStatus:
        """
        Entry point B: full recalculation after a payment mutation.

        ``rent_payments`` may contain payments of any category or contract;
        only the contract's Rent payments are summed.
        """
        as_of = require_date(as_of, "as_of")
        if contract.status.kind == StatusKind.COMPLETED:
            return contract.status

        if contract.end_date < as_of:
            new_status = ContractStatus.completed()
        else:
            paid = paid_rent_total(contract, rent_payments)
            if paid >= contract.monthly_rent:
                new_status = ContractStatus.paid_in_full()
            else:
                new_status = ContractStatus.debt(contract.monthly_rent - paid)

        self._log_transition(contract, new_status, "payment_change")
        return new_status

    @staticmethod
    def _log_transition(
        contract: ContractInfo,
        new_status: ContractStatus,
        trigger: str,
    ) -> None:
        if new_status != contract.status:
            logger.debug(
                "contract_status_evaluated",
                extra={
                    "contract_id": str(contract.id),
                    "from_status": contract.status.kind.value,
                    "to_status": new_status.kind.value,
                    "trigger": trigger,
                },
            )
