"""
Lightweight domain validation helpers.

Pure checks with no I/O.  Used at service and engine boundaries to enforce
Decimal-only amounts and the free-text rules for names, phones, e-mail
addresses and street addresses.  Every failure raises ``ValidationError``
naming the offending field.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from rent_kernel.exceptions import ValidationError

_NAME_RE = re.compile(r"[A-Za-zА-Яа-яЁё\- ]+")
_PHONE_RE = re.compile(r"[0-9+\- ]+")
_DIGITS_RE = re.compile(r"\d+")
_HAS_LETTER_RE = re.compile(r"[A-Za-zА-Яа-яЁё]")
_ADDRESS_RE = re.compile(r"[A-Za-zА-Яа-яЁё0-9\-\s/.,]+")

MIN_ADDRESS_LENGTH = 3

# Numeric(38, 9): 9 fractional digits, 29 integer digits.
AMOUNT_PLACES = 9
AMOUNT_INTEGER_DIGITS = 29


def to_decimal(value: Any, name: str = "amount") -> Decimal:
    """
    Coerce ``value`` to Decimal.

    Accepts Decimal, int and numeric strings.  Floats and booleans are
    rejected outright: a float has already lost precision by the time it
    reaches us.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError(name, f"{name} must be Decimal, not {type(value).__name__}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError(name, f"{name} must be a number, got {value!r}") from None
    elif value is None:
        raise ValidationError(name, f"{name} is required")
    else:
        raise ValidationError(name, f"{name} must be Decimal, not {type(value).__name__}")
    if not result.is_finite():
        raise ValidationError(name, f"{name} must be a finite number")
    return result


def require_positive(value: Any, name: str = "amount") -> Decimal:
    """Coerce to Decimal and require it to be strictly greater than zero."""
    amount = to_decimal(value, name)
    if amount <= 0:
        raise ValidationError(name, f"{name} must be greater than 0")
    return amount


def require_amount(value: Any, name: str = "amount") -> Decimal:
    """
    ``require_positive`` plus the limits of an amount column.

    Stored amounts keep ``AMOUNT_PLACES`` fractional digits and at most
    ``AMOUNT_INTEGER_DIGITS`` integer digits.  A value outside that range
    would read back as a different number, so it is refused here rather
    than rounded.  Trailing zeros past the last stored place are dropped.
    """
    amount = require_positive(value, name)
    if amount.adjusted() >= AMOUNT_INTEGER_DIGITS:
        raise ValidationError(
            name, f"{name} must have at most {AMOUNT_INTEGER_DIGITS} integer digits"
        )
    if amount.as_tuple().exponent < -AMOUNT_PLACES:
        with localcontext() as ctx:
            ctx.prec = AMOUNT_INTEGER_DIGITS + AMOUNT_PLACES
            stored = amount.quantize(Decimal(1).scaleb(-AMOUNT_PLACES))
        if stored != amount:
            raise ValidationError(
                name, f"{name} must have at most {AMOUNT_PLACES} decimal places"
            )
        return stored
    return amount


def require_date(value: Any, name: str) -> date:
    """Require a ``date`` instance."""
    if value is None:
        raise ValidationError(name, f"{name} is required")
    if not isinstance(value, date):
        raise ValidationError(name, f"{name} must be a date, not {type(value).__name__}")
    return value


def validate_name(value: str | None, name: str = "full_name") -> str:
    """Letters, spaces and hyphens only; not blank."""
    if value is None or not value.strip():
        raise ValidationError(name, f"{name} must not be empty")
    trimmed = value.strip()
    if not _NAME_RE.fullmatch(trimmed):
        raise ValidationError(name, f"{name} must contain only letters")
    return trimmed


def validate_phone(value: str | None) -> str | None:
    """Optional; digits, '+', '-' and spaces."""
    if value is None or not value.strip():
        return None
    trimmed = value.strip()
    if not _PHONE_RE.fullmatch(trimmed):
        raise ValidationError("phone", "phone may contain only digits, +, - and spaces")
    return trimmed


def validate_email(value: str | None) -> str | None:
    """Optional; must contain '@' and '.'."""
    if value is None or not value.strip():
        return None
    trimmed = value.strip()
    if "@" not in trimmed or "." not in trimmed:
        raise ValidationError("email", f"invalid email: {trimmed!r}")
    return trimmed


def validate_text(value: str | None, name: str) -> str:
    """Not blank, not digits only, at least one letter."""
    if value is None or not value.strip():
        raise ValidationError(name, f"{name} must not be empty")
    trimmed = value.strip()
    if _DIGITS_RE.fullmatch(trimmed):
        raise ValidationError(name, f"{name} cannot contain only digits")
    if not _HAS_LETTER_RE.search(trimmed):
        raise ValidationError(name, f"{name} must contain letters")
    return trimmed


def validate_address(value: str | None) -> str:
    """Not blank, not digits only, restricted charset, minimum length."""
    if value is None or not value.strip():
        raise ValidationError("address", "address must not be empty")
    trimmed = value.strip()
    if _DIGITS_RE.fullmatch(trimmed):
        raise ValidationError("address", "address must not be digits only")
    if not _ADDRESS_RE.fullmatch(trimmed):
        raise ValidationError("address", "address contains invalid characters")
    if len(trimmed) < MIN_ADDRESS_LENGTH:
        raise ValidationError("address", "address is too short")
    return trimmed


def optional_text(value: str | None) -> str | None:
    """Strip free-form notes; blank becomes None."""
    if value is None or not value.strip():
        return None
    return value.strip()
