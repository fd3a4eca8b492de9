"""Domain models for the rent kernel."""

from rent_kernel.models.contract import Contract
from rent_kernel.models.party import Party
from rent_kernel.models.payment import Payment
from rent_kernel.models.property import Property

__all__ = [
    "Contract",
    "Party",
    "Payment",
    "Property",
]
