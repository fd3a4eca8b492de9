"""
Module: rent_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the rent ledger
    engines.  This is the canonical import surface for rent_services and
    the CLI.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rent_kernel.domain, rent_kernel.exceptions and
    rent_kernel.logging_config (and sibling engine modules).
    MUST NOT import rent_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Dates are passed in as explicit parameters by the services.
    - Decimal-only arithmetic: floats are rejected.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from rent_engines import compute_schedule, ContractStatusPolicy
    from rent_engines import PaymentLedger, calculate_balance
"""

from rent_engines.balance import calculate_balance, paid_rent_total
from rent_engines.contract_status import ContractStatusPolicy
from rent_engines.ledger import PaymentLedger, PaymentSource
from rent_engines.proration import (
    ProrationSchedule,
    ScheduleRow,
    compute_schedule,
    days_in_month,
)
from rent_engines.tracer import traced_engine

__all__ = [
    "ContractStatusPolicy",
    "PaymentLedger",
    "PaymentSource",
    "ProrationSchedule",
    "ScheduleRow",
    "calculate_balance",
    "compute_schedule",
    "days_in_month",
    "paid_rent_total",
    "traced_engine",
]
