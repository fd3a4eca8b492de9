"""
Module: rent_kernel.selectors.contract_selector
Responsibility: Read-only contract queries: lookup, listing, the search the
    contract table offers (tenant, landlord or property, optionally filtered
    by status), and the referential-integrity checks run before a party or
    property is deleted.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/ and selectors/.  MUST NOT import from services/ or outer layers.
"""

from uuid import UUID

from sqlalchemy import exists, or_, select
from sqlalchemy.orm import Session

from rent_kernel.domain.dtos import ContractInfo
from rent_kernel.domain.status import StatusKind
from rent_kernel.models.contract import Contract
from rent_kernel.selectors.base import BaseSelector, matches
from rent_kernel.selectors.mapping import contract_to_info


class ContractSelector(BaseSelector[Contract]):
    """
    Selector for contract queries.

    Guarantees:
        - Listing order is start_date ascending.
        - Returns ContractInfo DTOs, never ORM rows.
    """

    def __init__(self, session: Session):
        super().__init__(session)

    def get(self, contract_id: UUID) -> ContractInfo | None:
        contract = self.session.get(Contract, contract_id)
        return contract_to_info(contract) if contract is not None else None

    def list_all(self) -> list[ContractInfo]:
        stmt = select(Contract).order_by(Contract.start_date, Contract.id)
        return [contract_to_info(c) for c in self.session.execute(stmt).scalars()]

    def search(
        self,
        query: str | None = None,
        status_kind: StatusKind | None = None,
    ) -> list[ContractInfo]:
        """
        Find contracts by tenant name, landlord name or property title.

        Args:
            query: Case-insensitive substring; blank matches every contract.
            status_kind: If given, only contracts in this state are returned.

        Returns:
            Matching contracts ordered by start date.
        """
        stmt = select(Contract).order_by(Contract.start_date, Contract.id)
        if status_kind is not None:
            stmt = stmt.where(Contract.status_kind == StatusKind(status_kind).value)

        results = []
        for contract in self.session.execute(stmt).scalars():
            if matches(
                query,
                contract.tenant.full_name if contract.tenant else None,
                contract.landlord.full_name if contract.landlord else None,
                contract.rented_property.title if contract.rented_property else None,
            ):
                results.append(contract_to_info(contract))
        return results

    def is_party_referenced(self, party_id: UUID) -> bool:
        """True if any contract names this party as tenant or landlord."""
        stmt = select(
            exists().where(
                or_(Contract.tenant_id == party_id, Contract.landlord_id == party_id)
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def is_property_referenced(self, property_id: UUID) -> bool:
        """True if any contract leases this property."""
        stmt = select(exists().where(Contract.property_id == property_id))
        return bool(self.session.execute(stmt).scalar())
