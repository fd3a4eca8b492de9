"""
Module: rent_kernel.selectors.base
Responsibility: Read side of the kernel.  Selectors load rent records and
    hand back frozen DTOs; the ``matches`` helper implements the search
    boxes of every record list.
Architecture position: Kernel > Selectors.  May import from db/, models/
    and domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Selectors never add, delete, flush or commit.
    - Return values are DTOs from rent_kernel.domain.dtos, never ORM rows.
"""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from rent_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(Generic[ModelType]):
    """Read-only queries over one model, on the caller's session."""

    def __init__(self, session: Session):
        self.session = session


def matches(query: str | None, *fields: str | None) -> bool:
    """
    True if ``query`` occurs in any of ``fields``, ignoring case.

    A blank or missing query matches everything, so an empty search box
    lists every record.  ``str.casefold`` is used instead of SQL ``LOWER``
    because SQLite only folds ASCII, and tenant names are often Cyrillic.
    """
    if query is None or not query.strip():
        return True
    needle = query.strip().casefold()
    return any(field is not None and needle in field.casefold() for field in fields)
