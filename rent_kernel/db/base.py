"""
Module: rent_kernel.db.base
Responsibility: Declarative base for the rent ledger tables.  Fixes the
    column conventions every model shares: string-stored UUID keys, exact
    Decimal money columns and record timestamps.
Architecture position: Kernel > DB.  Lowest import target of the kernel;
    every model imports from here.  MUST NOT import from models/, services/,
    selectors/, domain/, or outer layers.

Invariants enforced:
    - Every row has a uuid4 primary key, stored as String(36) so SQLite and
      server databases hold the same text.
    - Python ``Decimal`` annotations map to ExactDecimal, a Numeric(38, 9)
      that SQLite holds as fixed-point text.  Rent, prices, areas and payment
      amounts are never stored as float and read back unchanged.
    - ``created_at`` carries microseconds, so payments recorded on the same
      day keep their entry order.
"""

from datetime import UTC, date, datetime
from decimal import Decimal, localcontext
from typing import ClassVar
from uuid import UUID, uuid4

from sqlalchemy import Date, DateTime, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """UUID in Python, 36-character text in the database."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else UUID(value)


AMOUNT_PRECISION = 38
AMOUNT_SCALE = 9
_AMOUNT_QUANTUM = Decimal(1).scaleb(-AMOUNT_SCALE)


class ExactDecimal(TypeDecorator):
    """
    Numeric(38, 9) that reads back the Decimal it was given.

    SQLite has no exact numeric storage and would keep a Numeric column as
    a float, so there the value is written as fixed-point text instead.
    Other dialects use their native NUMERIC.
    """

    impl = Numeric(AMOUNT_PRECISION, AMOUNT_SCALE)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(AMOUNT_PRECISION + 2))
        return dialect.type_descriptor(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        with localcontext() as ctx:
            ctx.prec = AMOUNT_PRECISION + 2
            return format(Decimal(value).quantize(_AMOUNT_QUANTUM), "f")

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(value)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base.  Subclasses get an ``id`` and the shared type map."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: ExactDecimal(),
        datetime: DateTime(timezone=True),
        date: Date,
        UUID: UUIDString(),
    }

    id: Mapped[UUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Abstract base for records the user edits.

    ``created_at`` is set once on insert.  ``updated_at`` moves on every
    flush that changes the row.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(default=_utcnow, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )
