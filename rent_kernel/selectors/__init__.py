"""Read-only query selectors for the rent kernel."""

from rent_kernel.selectors.base import BaseSelector
from rent_kernel.selectors.contract_selector import ContractSelector
from rent_kernel.selectors.payment_selector import PaymentSelector

__all__ = [
    "BaseSelector",
    "ContractSelector",
    "PaymentSelector",
]
