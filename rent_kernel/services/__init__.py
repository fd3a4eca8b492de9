"""Services for the rent kernel (write side)."""

from rent_kernel.services.contract_service import ContractService
from rent_kernel.services.party_service import PartyService
from rent_kernel.services.payment_service import PaymentService
from rent_kernel.services.property_service import PropertyService

__all__ = [
    "ContractService",
    "PartyService",
    "PaymentService",
    "PropertyService",
]
