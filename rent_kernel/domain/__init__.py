"""
Pure domain layer.

This module contains pure data transfer objects and domain logic
with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock (except the injectable Clock itself)
- I/O

All domain objects are immutable and deterministic.
"""

from rent_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from rent_kernel.domain.dtos import (
    ContractInfo,
    PartyInfo,
    PartyType,
    PaymentCategory,
    PaymentInfo,
    PropertyInfo,
)
from rent_kernel.domain.status import ContractStatus, StatusKind

__all__ = [
    "Clock",
    "ContractInfo",
    "ContractStatus",
    "DeterministicClock",
    "PartyInfo",
    "PartyType",
    "PaymentCategory",
    "PaymentInfo",
    "PropertyInfo",
    "StatusKind",
    "SystemClock",
]
