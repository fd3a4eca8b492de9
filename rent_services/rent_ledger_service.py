"""
RentLedgerService -- orchestration of the rent ledger.

Responsibility:
    Composes the kernel CRUD services with the pure engines.  Every payment
    mutation updates the in-memory PaymentLedger and then runs the status
    policy's payment entry point on each affected contract.  Contract
    creation and edits run only the expiry entry point.

Architecture position:
    Services -- stateful orchestration over engines + kernel.  This is the
    only layer that reads the clock; it does so once per public call and
    hands the date to the engines.

Invariants enforced:
    - Services flush, never commit.  The caller owns the transaction.
    - The ledger and the database agree after every mutation made through
      this service.  Payments written behind its back are not seen until a
      new RentLedgerService (or ``reload_ledger()``).
    - A status is persisted only when the policy returned a different one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from rent_config.schema import RentConfig
from rent_engines.balance import calculate_balance, paid_rent_total
from rent_engines.contract_status import ContractStatusPolicy
from rent_engines.ledger import PaymentLedger
from rent_engines.proration import ProrationSchedule, compute_schedule
from rent_kernel.domain.clock import Clock, SystemClock
from rent_kernel.domain.dtos import (
    ContractInfo,
    PartyInfo,
    PaymentCategory,
    PaymentInfo,
    PropertyInfo,
)
from rent_kernel.domain.status import ContractStatus
from rent_kernel.logging_config import LogContext, get_logger
from rent_kernel.selectors.payment_selector import PaymentSelector
from rent_kernel.services.contract_service import ContractService
from rent_kernel.services.party_service import PartyService
from rent_kernel.services.payment_service import UNCHANGED, PaymentService
from rent_kernel.services.property_service import PropertyService

logger = get_logger("services.rent_ledger")


@dataclass(frozen=True)
class ContractSummary:
    """
    Everything the contract details view shows.

    ``paid_total`` sums every category; ``rent_paid`` and ``balance`` count
    Rent payments only.  ``payments`` is ordered by date.
    """

    contract: ContractInfo
    tenant: PartyInfo
    landlord: PartyInfo
    rented_property: PropertyInfo
    status: ContractStatus
    paid_total: Decimal
    rent_paid: Decimal
    balance: Decimal
    payments: tuple[PaymentInfo, ...]


class RentLedgerService:
    """
    Entry point for every ledger mutation and contract view.

    Args:
        session: SQLAlchemy session.  The caller commits.
        clock: Source of "today".  Defaults to the system clock.
        config: Active configuration.  Defaults to built-in values.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: RentConfig | None = None,
    ):
        self.session = session
        self.clock = clock or SystemClock()
        self.config = config or RentConfig()

        self.contracts = ContractService(
            session,
            enforce_dates=self.config.policy.enforce_contract_dates,
        )
        self.payments = PaymentService(session)
        self.parties = PartyService(session)
        self.properties = PropertyService(session)
        self.policy = ContractStatusPolicy()
        self.ledger = PaymentLedger.from_source(PaymentSelector(session))

    def reload_ledger(self) -> None:
        """Rebuild the in-memory ledger from the database."""
        self.ledger = PaymentLedger.from_source(PaymentSelector(self.session))

    # =========================================================================
    # Status wiring
    # =========================================================================

    def _persist_if_changed(
        self,
        contract: ContractInfo,
        new_status: ContractStatus,
    ) -> ContractInfo:
        if new_status == contract.status:
            return contract
        return self.contracts.set_status(contract.id, new_status)

    def _apply_structural_policy(self, contract: ContractInfo, as_of: date) -> ContractInfo:
        new_status = self.policy.on_contract_structural_change(contract, as_of)
        return self._persist_if_changed(contract, new_status)

    def _apply_payment_policy(self, contract_id: UUID, as_of: date) -> ContractInfo:
        contract = self.contracts.get_by_id(contract_id)
        new_status = self.policy.on_payment_change(
            contract,
            self.ledger.rent_payments(contract_id),
            as_of,
        )
        return self._persist_if_changed(contract, new_status)

    # =========================================================================
    # Contracts
    # =========================================================================

    def create_contract(
        self,
        tenant_id: UUID,
        landlord_id: UUID,
        property_id: UUID,
        start_date: date,
        end_date: date,
        monthly_rent: Decimal,
    ) -> ContractInfo:
        """Create a contract, then run the expiry check."""
        as_of = self.clock.today()
        contract = self.contracts.create_contract(
            tenant_id=tenant_id,
            landlord_id=landlord_id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            monthly_rent=monthly_rent,
        )
        with LogContext.bind(contract_id=str(contract.id)):
            return self._apply_structural_policy(contract, as_of)

    def update_contract(self, contract_id: UUID, **changes) -> ContractInfo:
        """
        Edit a contract's structural fields, then run the expiry check.

        Paid/debt is not re-evaluated here, even if the rent changed; it is
        refreshed by the next payment mutation.
        """
        as_of = self.clock.today()
        with LogContext.bind(contract_id=str(contract_id)):
            contract = self.contracts.update_contract(contract_id, **changes)
            return self._apply_structural_policy(contract, as_of)

    def delete_contract(self, contract_id: UUID) -> None:
        """Delete a contract.  Its payments stay in the ledger as orphans."""
        with LogContext.bind(contract_id=str(contract_id)):
            self.contracts.delete_contract(contract_id)
            for payment in self.ledger.for_contract(contract_id):
                self.ledger.replace(replace(payment, contract_id=None))

    def refresh_expired_contracts(self) -> list[ContractInfo]:
        """
        Run the expiry check over every contract.

        Returns:
            The contracts whose status changed.
        """
        as_of = self.clock.today()
        changed = []
        for contract in self.contracts.list_all():
            updated = self._apply_structural_policy(contract, as_of)
            if updated.status != contract.status:
                changed.append(updated)
        logger.info(
            "expired_contracts_refreshed",
            extra={"as_of": as_of, "changed_count": len(changed)},
        )
        return changed

    # =========================================================================
    # Payments
    # =========================================================================

    def add_payment(
        self,
        contract_id: UUID | None,
        payment_date: date,
        amount: Decimal,
        category: PaymentCategory | str,
        notes: str | None = None,
    ) -> PaymentInfo:
        """Record a payment and recalculate its contract's status."""
        as_of = self.clock.today()
        payment = self.payments.add_payment(
            contract_id=contract_id,
            payment_date=payment_date,
            amount=amount,
            category=category,
            notes=notes,
        )
        self.ledger.add(payment)
        if payment.contract_id is not None:
            with LogContext.bind(
                contract_id=str(payment.contract_id),
                payment_id=str(payment.id),
            ):
                self._apply_payment_policy(payment.contract_id, as_of)
        return payment

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
        Edit a payment and recalculate every contract it touched.

        If the payment moved to another contract, both the old and the new
        contract are recalculated.
        """
        as_of = self.clock.today()
        before = self.payments.get_by_id(payment_id)
        after = self.payments.update_payment(
            payment_id,
            contract_id=contract_id,
            payment_date=payment_date,
            amount=amount,
            category=category,
            notes=notes,
        )
        self.ledger.replace(after)

        affected = []
        for cid in (before.contract_id, after.contract_id):
            if cid is not None and cid not in affected:
                affected.append(cid)
        for cid in affected:
            with LogContext.bind(contract_id=str(cid), payment_id=str(payment_id)):
                self._apply_payment_policy(cid, as_of)
        return after

    def delete_payment(self, payment_id: UUID) -> PaymentInfo:
        """Delete a payment and recalculate its contract's status."""
        as_of = self.clock.today()
        removed = self.payments.delete_payment(payment_id)
        self.ledger.remove(payment_id)
        if removed.contract_id is not None:
            with LogContext.bind(
                contract_id=str(removed.contract_id),
                payment_id=str(payment_id),
            ):
                self._apply_payment_policy(removed.contract_id, as_of)
        return removed

    # =========================================================================
    # Views
    # =========================================================================

    def contract_balance(self, contract_id: UUID) -> Decimal:
        """Rent paid minus monthly rent."""
        contract = self.contracts.get_by_id(contract_id)
        return calculate_balance(contract, self.ledger.for_contract(contract_id))

    def contract_summary(self, contract_id: UUID) -> ContractSummary:
        contract = self.contracts.get_by_id(contract_id)
        history = tuple(self.ledger.for_contract(contract_id))
        return ContractSummary(
            contract=contract,
            tenant=self.parties.get_by_id(contract.tenant_id),
            landlord=self.parties.get_by_id(contract.landlord_id),
            rented_property=self.properties.get_by_id(contract.property_id),
            status=contract.status,
            paid_total=sum((p.amount for p in history), Decimal("0")),
            rent_paid=paid_rent_total(contract, history),
            balance=calculate_balance(contract, history),
            payments=history,
        )

    def prorate_for_property(
        self,
        property_id: UUID,
        start: date,
        end: date,
        monthly_rent: Decimal | None = None,
    ) -> ProrationSchedule:
        """Proration schedule using the property's price unless a rent is given."""
        prop = self.properties.get_by_id(property_id)
        rent = monthly_rent if monthly_rent is not None else prop.price
        return compute_schedule(start, end, rent)
