"""
Data Transfer Objects for the rent domain.

These are pure data structures with no ORM dependencies.  Services return
them instead of ORM entities, and the ledger engines take them as their
only inputs, so an engine never holds a session or a lazy relationship.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from rent_kernel.domain.status import ContractStatus
from rent_kernel.exceptions import InvalidCategoryError


class PaymentCategory(str, Enum):
    """What a payment was for.  Only RENT counts toward paid-rent totals."""

    RENT = "Rent"
    UTILITIES = "Utilities"
    PENALTY = "Penalty"
    DEPOSIT = "Deposit"

    @classmethod
    def parse(cls, value: PaymentCategory | str | None) -> PaymentCategory:
        """
        Resolve a category from its value or name, case-insensitively.

        Raises:
            InvalidCategoryError: If ``value`` is blank or unknown.
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            raise InvalidCategoryError(value)
        wanted = str(value).strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise InvalidCategoryError(value)


class PartyType(str, Enum):
    """Role a person plays in lease contracts."""

    TENANT = "tenant"
    LANDLORD = "landlord"


@dataclass(frozen=True)
class PartyInfo:
    """Immutable view of a tenant or landlord."""

    id: UUID
    party_type: PartyType
    full_name: str
    phone: str | None = None
    email: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PropertyInfo:
    """Immutable view of a rentable property."""

    id: UUID
    title: str
    address: str
    area: Decimal
    price: Decimal
    notes: str | None = None


@dataclass(frozen=True)
class ContractInfo:
    """
    Immutable view of a lease contract.

    The status field is the only one the ledger engines ever change, and they
    do so by returning a new ContractStatus rather than mutating this object.
    """

    id: UUID
    tenant_id: UUID
    landlord_id: UUID
    property_id: UUID
    start_date: date
    end_date: date
    monthly_rent: Decimal
    status: ContractStatus

    def with_status(self, status: ContractStatus) -> ContractInfo:
        """Return a copy carrying ``status``."""
        return replace(self, status=status)


@dataclass(frozen=True)
class PaymentInfo:
    """Immutable view of a payment.  ``contract_id`` is None for orphans."""

    id: UUID
    contract_id: UUID | None
    payment_date: date
    amount: Decimal
    category: PaymentCategory
    notes: str | None = None

    @property
    def is_rent(self) -> bool:
        return self.category == PaymentCategory.RENT

    @property
    def is_orphan(self) -> bool:
        return self.contract_id is None
