"""
rent_services -- orchestration over the rent engines and the kernel.

Dependency direction:
    rent_services/ -> rent_engines/  (allowed)
    rent_services/ -> rent_kernel/   (allowed)
    rent_engines/  -> rent_services/ (FORBIDDEN)
    rent_kernel/   -> rent_services/ (FORBIDDEN)
"""

from rent_services.presentation import (
    format_amount,
    format_date,
    render_schedule,
    render_status,
    render_summary,
)
from rent_services.rent_ledger_service import ContractSummary, RentLedgerService

__all__ = [
    "ContractSummary",
    "RentLedgerService",
    "format_amount",
    "format_date",
    "render_schedule",
    "render_status",
    "render_summary",
]
