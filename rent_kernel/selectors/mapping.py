"""
ORM row -> DTO conversion.

Shared by selectors and services so every read path hands out the same
immutable views.
"""

from rent_kernel.domain.dtos import (
    ContractInfo,
    PartyInfo,
    PartyType,
    PaymentCategory,
    PaymentInfo,
    PropertyInfo,
)
from rent_kernel.domain.status import ContractStatus, StatusKind
from rent_kernel.models.contract import Contract
from rent_kernel.models.party import Party
from rent_kernel.models.payment import Payment
from rent_kernel.models.property import Property


def party_to_info(party: Party) -> PartyInfo:
    return PartyInfo(
        id=party.id,
        party_type=PartyType(party.party_type),
        full_name=party.full_name,
        phone=party.phone,
        email=party.email,
        notes=party.notes,
    )


def property_to_info(prop: Property) -> PropertyInfo:
    return PropertyInfo(
        id=prop.id,
        title=prop.title,
        address=prop.address,
        area=prop.area,
        price=prop.price,
        notes=prop.notes,
    )


def status_from_columns(kind: str, debt_amount) -> ContractStatus:
    """Rebuild the status variant from its two persisted columns."""
    status_kind = StatusKind(kind)
    if status_kind == StatusKind.DEBT:
        return ContractStatus.debt(debt_amount)
    return ContractStatus(status_kind)


def contract_to_info(contract: Contract) -> ContractInfo:
    return ContractInfo(
        id=contract.id,
        tenant_id=contract.tenant_id,
        landlord_id=contract.landlord_id,
        property_id=contract.property_id,
        start_date=contract.start_date,
        end_date=contract.end_date,
        monthly_rent=contract.monthly_rent,
        status=status_from_columns(contract.status_kind, contract.debt_amount),
    )


def payment_to_info(payment: Payment) -> PaymentInfo:
    return PaymentInfo(
        id=payment.id,
        contract_id=payment.contract_id,
        payment_date=payment.payment_date,
        amount=payment.amount,
        category=PaymentCategory.parse(payment.category),
        notes=payment.notes,
    )
