"""
Clock -- where "today" comes from.

Contract expiry depends on the current date, so services take a Clock in
their constructor and read it once per call.  Engines never see a Clock;
they get that date as an explicit ``as_of`` argument.  Tests use
DeterministicClock to put "today" on either side of a contract's end date.
"""

from abc import ABC, abstractmethod
from datetime import UTC, date, datetime, timedelta


class Clock(ABC):
    """Source of the current time.  ``now()`` is timezone-aware."""

    @abstractmethod
    def now(self) -> datetime: ...

    def today(self) -> date:
        """Calendar date of ``now()``; what expiry checks compare against."""
        return self.now().date()


class SystemClock(Clock):
    """Wall clock in the machine's local timezone, so "today" matches the user's."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class DeterministicClock(Clock):
    """
    Clock that only moves when told to.

    A plain ``date`` is read as noon UTC of that day, so ``today()`` returns
    exactly that date.  Defaults to 2024-01-01.
    """

    def __init__(self, fixed_time: datetime | date | None = None):
        self._current = self._coerce(fixed_time or date(2024, 1, 1))

    @staticmethod
    def _coerce(value: datetime | date) -> datetime:
        if isinstance(value, datetime):
            return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
        return datetime(value.year, value.month, value.day, 12, tzinfo=UTC)

    def now(self) -> datetime:
        return self._current

    def set_date(self, value: datetime | date) -> None:
        self._current = self._coerce(value)

    def advance_days(self, days: int = 1) -> date:
        """Move forward (or back, for negative ``days``) and return the new date."""
        self._current += timedelta(days=days)
        return self.today()
