"""
Module: rent_engines.balance
Responsibility:
    Signed balance of a contract: rent paid minus one month's rent.
    Positive means overpaid, zero means settled, negative means owed.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only Rent-category payments belonging to the contract count.
      Utilities, penalties and deposits never move the balance.
    - The comparison is against a single month's rent, not against the rent
      accrued over the elapsed term.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from rent_engines.tracer import traced_engine
from rent_kernel.domain.dtos import ContractInfo, PaymentInfo


def paid_rent_total(contract: ContractInfo, payments: Iterable[PaymentInfo]) -> Decimal:
    """Sum of the contract's Rent-category payments."""
    return sum(
        (p.amount for p in payments if p.is_rent and p.contract_id == contract.id),
        Decimal("0"),
    )


@traced_engine("balance", "1.0", fingerprint_fields=("contract", "payments"))
def calculate_balance(contract: ContractInfo, payments: Iterable[PaymentInfo]) -> Decimal:
    """
    Balance = paid rent - monthly rent.

    ``payments`` may contain any payments; those of other categories or
    other contracts are ignored.
    """
    payments = tuple(payments)
    return paid_rent_total(contract, payments) - contract.monthly_rent
