"""
Service layer for tenants and landlords.

Returns PartyInfo DTOs instead of ORM entities.  A party that appears on
any contract cannot be deleted.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select

from rent_kernel.domain.dtos import PartyInfo, PartyType
from rent_kernel.domain.validation import (
    optional_text,
    validate_email,
    validate_name,
    validate_phone,
)
from rent_kernel.exceptions import EntityReferencedError, PartyNotFoundError
from rent_kernel.logging_config import get_logger
from rent_kernel.models.party import Party
from rent_kernel.selectors.base import matches
from rent_kernel.selectors.contract_selector import ContractSelector
from rent_kernel.selectors.mapping import party_to_info
from rent_kernel.services.base import BaseService

logger = get_logger("services.party")


class PartyService(BaseService[Party]):
    """
    Service for managing tenants and landlords.

    All public methods return PartyInfo DTOs, not ORM Party entities.
    """

    model = Party
    not_found = PartyNotFoundError

    def get_by_id(self, party_id: UUID) -> PartyInfo:
        """
        Get party by ID.

        Raises:
            PartyNotFoundError: If party doesn't exist.
        """
        return party_to_info(self._get_by_id(party_id))

    def list_by_type(self, party_type: PartyType) -> list[PartyInfo]:
        """List tenants or landlords ordered by name."""
        stmt = (
            select(Party)
            .where(Party.party_type == PartyType(party_type).value)
            .order_by(Party.full_name, Party.id)
        )
        return [party_to_info(p) for p in self.session.execute(stmt).scalars()]

    def search(
        self,
        query: str | None = None,
        party_type: PartyType | None = None,
    ) -> list[PartyInfo]:
        """Case-insensitive substring search on full name."""
        stmt = select(Party).order_by(Party.full_name, Party.id)
        if party_type is not None:
            stmt = stmt.where(Party.party_type == PartyType(party_type).value)
        return [
            party_to_info(p)
            for p in self.session.execute(stmt).scalars()
            if matches(query, p.full_name)
        ]

    def add_party(
        self,
        party_type: PartyType,
        full_name: str,
        phone: str | None = None,
        email: str | None = None,
        notes: str | None = None,
    ) -> PartyInfo:
        """
        Create a tenant or landlord.

        Raises:
            ValidationError: If the name, phone or e-mail is malformed.
        """
        party = Party(
            party_type=PartyType(party_type).value,
            full_name=validate_name(full_name),
            phone=validate_phone(phone),
            email=validate_email(email),
            notes=optional_text(notes),
        )
        self.session.add(party)
        self.session.flush()
        logger.info(
            "party_added",
            extra={"party_id": str(party.id), "party_type": party.party_type},
        )
        return party_to_info(party)

    def update_party(
        self,
        party_id: UUID,
        full_name: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        notes: str | None = None,
    ) -> PartyInfo:
        """
        Update party details.  Only the fields given are changed.

        Note: party_type cannot be changed.
        """
        party = self._get_by_id(party_id)

        if full_name is not None:
            party.full_name = validate_name(full_name)
        if phone is not None:
            party.phone = validate_phone(phone)
        if email is not None:
            party.email = validate_email(email)
        if notes is not None:
            party.notes = optional_text(notes)

        self.session.flush()
        logger.info("party_updated", extra={"party_id": str(party.id)})
        return party_to_info(party)

    def delete_party(self, party_id: UUID) -> None:
        """
        Delete a party.

        Raises:
            PartyNotFoundError: If party doesn't exist.
            EntityReferencedError: If any contract references the party.
        """
        party = self._get_by_id(party_id)
        if ContractSelector(self.session).is_party_referenced(party.id):
            logger.warning(
                "party_delete_refused",
                extra={"party_id": str(party.id), "reason": "referenced_by_contract"},
            )
            raise EntityReferencedError(party.party_type, str(party.id))
        self.session.delete(party)
        self.session.flush()
        logger.info("party_deleted", extra={"party_id": str(party_id)})
