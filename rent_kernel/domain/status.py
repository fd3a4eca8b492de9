"""
ContractStatus -- tagged lifecycle status of a lease contract.

Responsibility:
    Replaces the free-form status text of a contract with a small tagged
    variant: ``Active``, ``Completed``, ``PaidInFull`` or ``Debt(amount)``.
    Text is produced only by ``render()`` at the presentation boundary, so a
    monetary value is never parsed back out of a display string.

Architecture position:
    Kernel > Domain -- pure value object, zero I/O.

Invariants enforced:
    - ``Debt`` always carries a strictly positive Decimal amount.
    - Every other kind carries no amount.
    - ``Completed`` is terminal; ``is_terminal`` lets policies test it
      without comparing strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum


def quantize_half_up(amount: Decimal, places: int) -> Decimal:
    """Round half-up to ``places`` decimals, whatever the amount's magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


class StatusKind(str, Enum):
    """Lifecycle state of a contract."""

    ACTIVE = "active"
    COMPLETED = "completed"
    PAID_IN_FULL = "paid_in_full"
    DEBT = "debt"


_LABELS = {
    StatusKind.ACTIVE: "Active",
    StatusKind.COMPLETED: "Completed",
    StatusKind.PAID_IN_FULL: "PaidInFull",
    StatusKind.DEBT: "Debt",
}


@dataclass(frozen=True, slots=True)
class ContractStatus:
    """
    Immutable contract status.

    Contract:
        Build instances with the named constructors (``active()``,
        ``completed()``, ``paid_in_full()``, ``debt(amount)``).

    Guarantees:
        - Hashable and comparable by value.
        - ``debt_amount`` is None unless ``kind`` is DEBT.
    """

    kind: StatusKind
    debt_amount: Decimal | None = None

    def __post_init__(self) -> None:
        if self.kind == StatusKind.DEBT:
            if not isinstance(self.debt_amount, Decimal):
                raise TypeError(
                    f"Debt amount must be Decimal, not {type(self.debt_amount).__name__}"
                )
            if self.debt_amount <= 0:
                raise ValueError(f"Debt amount must be positive, got {self.debt_amount}")
        elif self.debt_amount is not None:
            raise ValueError(f"{self.kind.value} status cannot carry an amount")

    @classmethod
    def active(cls) -> ContractStatus:
        return cls(StatusKind.ACTIVE)

    @classmethod
    def completed(cls) -> ContractStatus:
        return cls(StatusKind.COMPLETED)

    @classmethod
    def paid_in_full(cls) -> ContractStatus:
        return cls(StatusKind.PAID_IN_FULL)

    @classmethod
    def debt(cls, amount: Decimal) -> ContractStatus:
        return cls(StatusKind.DEBT, amount)

    @property
    def is_terminal(self) -> bool:
        """True once the contract is Completed."""
        return self.kind == StatusKind.COMPLETED

    @property
    def label(self) -> str:
        """Short label without the amount (used for filtering)."""
        return _LABELS[self.kind]

    def render(self, amount_places: int | None = None) -> str:
        """
        Render the status as user-facing text.

        Args:
            amount_places: If given, the debt amount is quantized to this
                many decimal places; otherwise it is printed as stored.
        """
        if self.kind != StatusKind.DEBT:
            return self.label
        amount = self.debt_amount
        if amount_places is not None:
            amount = quantize_half_up(amount, amount_places)
        return f"{self.label}: {amount}"

    def __str__(self) -> str:
        return self.render()
