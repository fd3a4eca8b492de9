"""
BaseService -- shared shape of the record services.

Responsibility:
    Holds the caller's session and the lookup-or-raise step every service
    starts with.  A subclass names its ORM model and the NotFoundError
    subclass raised for a missing id.

Architecture position:
    Kernel > Services -- imperative shell infrastructure.

Invariants enforced:
    Services flush within the caller's transaction and never commit or
    roll back.  The caller (RentLedgerService's caller, the CLI, or the test
    harness) owns the transaction via ``session_scope()``.
"""

from abc import ABC
from typing import ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy.orm import Session

from rent_kernel.db.base import Base
from rent_kernel.exceptions import NotFoundError

ModelType = TypeVar("ModelType", bound=Base)
OtherModel = TypeVar("OtherModel", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Base class for PartyService, PropertyService, ContractService and
    PaymentService.

    Subclasses set:
        model: ORM class the service manages.
        not_found: Exception raised by ``_get_by_id`` for an unknown id.
    """

    model: ClassVar[type[Base]]
    not_found: ClassVar[type[NotFoundError]]

    def __init__(self, session: Session):
        self.session = session

    def _load(
        self,
        model: type[OtherModel],
        record_id: UUID,
        not_found: type[NotFoundError],
    ) -> OtherModel:
        record = self.session.get(model, record_id)
        if record is None:
            raise not_found(str(record_id))
        return record

    def _get_by_id(self, record_id: UUID) -> ModelType:
        return self._load(self.model, record_id, self.not_found)
