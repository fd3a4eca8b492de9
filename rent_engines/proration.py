"""
Module: rent_engines.proration
Responsibility:
    Split an arbitrary rental period into per-calendar-month charges.  Each
    month is charged at its own daily rate (monthly rent divided by the
    actual number of days in that month, leap years included).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import rent_kernel.domain and rent_kernel.exceptions.

Invariants enforced:
    - Purity: no clock access, no I/O.
    - Decimal-only arithmetic; floats are rejected at the boundary.
    - No rounding during computation.  Rounding is a presentation concern,
      so a displayed sum of rounded rows may differ from the rounded total
      by one minor unit.
    - total_days is computed from the window, independently of the rows,
      and always equals the sum of row days.

Failure modes:
    - ValidationError if a date is missing or the rent is not a positive
      Decimal.
    - InvalidRangeError if end is before start.

Usage:
    from datetime import date
    from decimal import Decimal
    from rent_engines.proration import compute_schedule

    schedule = compute_schedule(date(2024, 1, 15), date(2024, 2, 10), Decimal("30000"))
    schedule.months_count   # 2
    schedule.total_days     # 27
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from rent_engines.tracer import traced_engine
from rent_kernel.domain.validation import require_date, require_positive
from rent_kernel.exceptions import InvalidRangeError
from rent_kernel.logging_config import get_logger

logger = get_logger("engines.proration")

PERIOD_SEPARATOR = " — "


def days_in_month(year: int, month: int) -> int:
    """Actual number of days in the month, leap years included."""
    return calendar.monthrange(year, month)[1]


def _next_month(first: date) -> date:
    if first.month == 12:
        return date(first.year + 1, 1, 1)
    return date(first.year, first.month + 1, 1)


def _as_date(value, name: str) -> date:
    value = require_date(value, name)
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class ScheduleRow:
    """
    One calendar month of a proration schedule.

    Guarantees:
        - period_start and period_end lie in the same calendar month.
        - days == (period_end - period_start).days + 1 and days >= 1.
        - amount == daily_rate * days, unrounded.
    """

    year: int
    month: int
    period_start: date
    period_end: date
    days: int
    daily_rate: Decimal
    amount: Decimal

    @property
    def month_label(self) -> str:
        """``MM.YYYY``"""
        return "%02d.%d" % (self.month, self.year)

    def period_label(self, date_format: str = "%d.%m.%Y") -> str:
        """Clipped period, e.g. ``15.01.2024 — 31.01.2024``."""
        return (
            self.period_start.strftime(date_format)
            + PERIOD_SEPARATOR
            + self.period_end.strftime(date_format)
        )


@dataclass(frozen=True)
class ProrationSchedule:
    """
    Result of a proration calculation.

    Guarantees:
        - rows are in calendar order, one per month intersected by the window.
        - months_count == len(rows).
        - total_days == end - start + 1 == sum of row days.
        - total_amount == sum of row amounts, unrounded.
    """

    start: date
    end: date
    monthly_rent: Decimal
    rows: tuple[ScheduleRow, ...]
    total_days: int
    months_count: int
    total_amount: Decimal


@traced_engine("proration", "1.0", fingerprint_fields=("start", "end", "monthly_rent"))
def compute_schedule(start: date, end: date, monthly_rent: Decimal) -> ProrationSchedule:
    """
    Compute the per-month charges for the inclusive window ``[start, end]``.

    Args:
        start: First rented day.
        end: Last rented day (inclusive).
        monthly_rent: Rent for one full calendar month.

    Returns:
        ProrationSchedule with one row per calendar month in the window.

    Raises:
        ValidationError: Missing date or non-positive rent.
        InvalidRangeError: end before start.
    """
    start = _as_date(start, "start")
    end = _as_date(end, "end")
    rent = require_positive(monthly_rent, "monthly_rent")
    if end < start:
        raise InvalidRangeError(start, end)

    rows: list[ScheduleRow] = []
    total_amount = Decimal("0")

    month_start = start.replace(day=1)
    while month_start <= end:
        dim = days_in_month(month_start.year, month_start.month)
        month_end = month_start.replace(day=dim)

        period_start = max(start, month_start)
        period_end = min(end, month_end)
        days = (period_end - period_start).days + 1

        if days > 0:
            daily_rate = rent / Decimal(dim)
            amount = daily_rate * days
            rows.append(
                ScheduleRow(
                    year=month_start.year,
                    month=month_start.month,
                    period_start=period_start,
                    period_end=period_end,
                    days=days,
                    daily_rate=daily_rate,
                    amount=amount,
                )
            )
            total_amount += amount

        month_start = _next_month(month_start)

    total_days = (end - start).days + 1

    logger.debug(
        "schedule_computed",
        extra={"months_count": len(rows), "total_days": total_days},
    )

    return ProrationSchedule(
        start=start,
        end=end,
        monthly_rent=rent,
        rows=tuple(rows),
        total_days=total_days,
        months_count=len(rows),
        total_amount=total_amount,
    )
