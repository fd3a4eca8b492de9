"""
Typed Exception Hierarchy for the Rent Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (the presentation layer, the CLI, tests) must never parse error
messages to decide what happened.  Every error here:
  1. Has its own class (catch by type, not by message)
  2. Has a CODE class attribute (machine-readable)
  3. Carries structured data (field names, ids, dates)

Example - WRONG way to handle errors:
    try:
        compute_schedule(start, end, rent)
    except Exception as e:
        if "before" in str(e):  # FRAGILE
            ...

Example - RIGHT way:
    try:
        compute_schedule(start, end, rent)
    except InvalidRangeError as e:
        show_warning(code=e.code, start=e.start, end=e.end)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from RentKernelError:

    RentKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidCategoryError
    |   +-- EntityReferencedError
    |
    +-- InvalidRangeError
    |
    +-- NotFoundError
        +-- ContractNotFoundError
        +-- PaymentNotFoundError
        +-- PartyNotFoundError
        +-- PropertyNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category    | Code                 | When Raised
------------|----------------------|------------------------------------------
Validation  | VALIDATION_ERROR     | Missing date, non-positive amount, bad text
            | INVALID_CATEGORY     | Payment category outside the known set
            | ENTITY_REFERENCED    | Delete of a party/property used by a contract
------------|----------------------|------------------------------------------
Range       | INVALID_RANGE        | End date before start date
------------|----------------------|------------------------------------------
Not found   | CONTRACT_NOT_FOUND   | Contract id does not exist
            | PAYMENT_NOT_FOUND    | Payment id does not exist
            | PARTY_NOT_FOUND      | Tenant/landlord id does not exist
            | PROPERTY_NOT_FOUND   | Property id does not exist

The ledger engines only ever raise ValidationError and InvalidRangeError.
NotFoundError subclasses come from the record services.
"""

from datetime import date


class RentKernelError(Exception):
    """
    Base exception for all rent kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "RENT_KERNEL_ERROR"


# Validation exceptions


class ValidationError(RentKernelError):
    """Input rejected before any state was touched."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class InvalidCategoryError(ValidationError):
    """Payment category is not one of the known categories."""

    code: str = "INVALID_CATEGORY"

    def __init__(self, category: str | None):
        self.category = category
        super().__init__("category", f"Unknown payment category: {category!r}")


class EntityReferencedError(ValidationError):
    """Entity cannot be deleted because a contract still references it."""

    code: str = "ENTITY_REFERENCED"

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            "id",
            f"{entity_type} {entity_id} cannot be deleted: referenced by a contract",
        )


# Range exceptions


class InvalidRangeError(RentKernelError):
    """End date is before start date."""

    code: str = "INVALID_RANGE"

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(
            f"End date {end.isoformat()} is before start date {start.isoformat()}"
        )


# Not-found exceptions


class NotFoundError(RentKernelError):
    """Base exception for missing records."""

    code: str = "NOT_FOUND"


class ContractNotFoundError(NotFoundError):
    """Contract was not found."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: str):
        self.contract_id = contract_id
        super().__init__(f"Contract not found: {contract_id}")


class PaymentNotFoundError(NotFoundError):
    """Payment was not found."""

    code: str = "PAYMENT_NOT_FOUND"

    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(f"Payment not found: {payment_id}")


class PartyNotFoundError(NotFoundError):
    """Tenant or landlord was not found."""

    code: str = "PARTY_NOT_FOUND"

    def __init__(self, party_id: str):
        self.party_id = party_id
        super().__init__(f"Party not found: {party_id}")


class PropertyNotFoundError(NotFoundError):
    """Property was not found."""

    code: str = "PROPERTY_NOT_FOUND"

    def __init__(self, property_id: str):
        self.property_id = property_id
        super().__init__(f"Property not found: {property_id}")
