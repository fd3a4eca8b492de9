"""
Service layer for lease contracts.

Persists, loads and deletes contracts and returns ContractInfo DTOs.  This
service never decides a status on its own: the status columns are written
through ``set_status()`` with a value the ContractStatusPolicy computed.
Orchestration (which policy entry point runs after which mutation) lives in
``rent_services.RentLedgerService``.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import update

from rent_kernel.domain.dtos import ContractInfo, PartyType
from rent_kernel.domain.status import ContractStatus, StatusKind
from rent_kernel.domain.validation import require_amount, require_date
from rent_kernel.exceptions import (
    ContractNotFoundError,
    InvalidRangeError,
    PartyNotFoundError,
    PropertyNotFoundError,
    ValidationError,
)
from rent_kernel.logging_config import get_logger
from rent_kernel.models.contract import Contract
from rent_kernel.models.party import Party
from rent_kernel.models.payment import Payment
from rent_kernel.models.property import Property
from rent_kernel.selectors.contract_selector import ContractSelector
from rent_kernel.selectors.mapping import contract_to_info
from rent_kernel.services.base import BaseService

logger = get_logger("services.contract")


class ContractService(BaseService[Contract]):
    """
    Service for managing contracts.

    Contract:
        ``enforce_dates`` controls whether create/update refuse an end date
        before the start date.  The proration calculator always refuses such
        a range regardless of this flag.
    """

    model = Contract
    not_found = ContractNotFoundError

    def __init__(self, session, enforce_dates: bool = True):
        super().__init__(session)
        self.enforce_dates = enforce_dates

    # =========================================================================
    # Lookups
    # =========================================================================

    def _require_party(self, party_id: UUID, expected: PartyType, field: str) -> None:
        if party_id is None:
            raise ValidationError(field, f"{field} is required")
        party = self._load(Party, party_id, PartyNotFoundError)
        if party.party_type != expected.value:
            raise ValidationError(field, f"{field} must reference a {expected.value}")

    def _require_property(self, property_id: UUID) -> None:
        if property_id is None:
            raise ValidationError("property_id", "property_id is required")
        self._load(Property, property_id, PropertyNotFoundError)

    def _check_dates(self, start_date: date, end_date: date) -> None:
        require_date(start_date, "start_date")
        require_date(end_date, "end_date")
        if self.enforce_dates and end_date < start_date:
            raise InvalidRangeError(start_date, end_date)

    def get_by_id(self, contract_id: UUID) -> ContractInfo:
        """
        Get contract by ID.

        Raises:
            ContractNotFoundError: If contract doesn't exist.
        """
        return contract_to_info(self._get_by_id(contract_id))

    def list_all(self) -> list[ContractInfo]:
        return ContractSelector(self.session).list_all()

    def search(
        self,
        query: str | None = None,
        status_kind: StatusKind | None = None,
    ) -> list[ContractInfo]:
        """Search by tenant, landlord or property; optionally filter by status."""
        return ContractSelector(self.session).search(query, status_kind)

    # =========================================================================
    # Mutations
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
        """
        Create a contract in the Active state.

        Raises:
            ValidationError: Missing references or dates, non-positive rent,
                or a party of the wrong type.
            InvalidRangeError: end_date before start_date (when enforced).
            PartyNotFoundError / PropertyNotFoundError: Dangling references.
        """
        self._require_party(tenant_id, PartyType.TENANT, "tenant_id")
        self._require_party(landlord_id, PartyType.LANDLORD, "landlord_id")
        self._require_property(property_id)
        self._check_dates(start_date, end_date)
        rent = require_amount(monthly_rent, "monthly_rent")

        contract = Contract(
            tenant_id=tenant_id,
            landlord_id=landlord_id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            monthly_rent=rent,
            status_kind=StatusKind.ACTIVE.value,
            debt_amount=None,
        )
        self.session.add(contract)
        self.session.flush()
        logger.info(
            "contract_created",
            extra={
                "contract_id": str(contract.id),
                "start_date": start_date,
                "end_date": end_date,
                "monthly_rent": rent,
            },
        )
        return contract_to_info(contract)

    def update_contract(
        self,
        contract_id: UUID,
        tenant_id: UUID | None = None,
        landlord_id: UUID | None = None,
        property_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        monthly_rent: Decimal | None = None,
    ) -> ContractInfo:
        """
        Change the structural fields of a contract.  Only the fields given
        are changed; the status is left as it was.
        """
        contract = self._get_by_id(contract_id)

        if tenant_id is not None:
            self._require_party(tenant_id, PartyType.TENANT, "tenant_id")
            contract.tenant_id = tenant_id
        if landlord_id is not None:
            self._require_party(landlord_id, PartyType.LANDLORD, "landlord_id")
            contract.landlord_id = landlord_id
        if property_id is not None:
            self._require_property(property_id)
            contract.property_id = property_id

        new_start = start_date if start_date is not None else contract.start_date
        new_end = end_date if end_date is not None else contract.end_date
        self._check_dates(new_start, new_end)
        contract.start_date = new_start
        contract.end_date = new_end

        if monthly_rent is not None:
            contract.monthly_rent = require_amount(monthly_rent, "monthly_rent")

        self.session.flush()
        logger.info("contract_updated", extra={"contract_id": str(contract.id)})
        return contract_to_info(contract)

    def set_status(self, contract_id: UUID, status: ContractStatus) -> ContractInfo:
        """Persist a status computed by the status policy."""
        contract = self._get_by_id(contract_id)
        previous = contract.status_kind
        contract.status_kind = status.kind.value
        contract.debt_amount = status.debt_amount
        self.session.flush()
        if previous != contract.status_kind:
            logger.info(
                "contract_status_changed",
                extra={
                    "contract_id": str(contract.id),
                    "from_status": previous,
                    "to_status": contract.status_kind,
                },
            )
        return contract_to_info(contract)

    def delete_contract(self, contract_id: UUID) -> int:
        """
        Delete a contract.  Its payments are kept and become orphans.

        Returns:
            Number of payments that were detached.

        Raises:
            ContractNotFoundError: If contract doesn't exist.
        """
        contract = self._get_by_id(contract_id)
        result = self.session.execute(
            update(Payment)
            .where(Payment.contract_id == contract.id)
            .values(contract_id=None)
            .execution_options(synchronize_session="fetch")
        )
        detached = result.rowcount or 0
        self.session.delete(contract)
        self.session.flush()
        # Loaded payments may still hold the deleted contract on their relationship.
        self.session.expire_all()
        logger.info(
            "contract_deleted",
            extra={"contract_id": str(contract_id), "detached_payments": detached},
        )
        return detached
