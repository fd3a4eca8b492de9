"""
Tests for field validation helpers.

Covers:
- Decimal coercion (floats and booleans rejected)
- Positive amounts and required dates
- Name, phone, e-mail, free text and address rules
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from rent_kernel.domain.validation import (
    optional_text,
    require_amount,
    require_date,
    require_positive,
    to_decimal,
    validate_address,
    validate_email,
    validate_name,
    validate_phone,
    validate_text,
)
from rent_kernel.exceptions import ValidationError


class TestToDecimal:
    def test_decimal_passthrough(self):
        assert to_decimal(Decimal("12.34")) == Decimal("12.34")

    def test_int_and_str(self):
        assert to_decimal(5) == Decimal("5")
        assert to_decimal(" 7.50 ") == Decimal("7.50")

    @pytest.mark.parametrize("value", [1.5, True, None, "abc", [], Decimal("NaN"), Decimal("Infinity")])
    def test_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            to_decimal(value, "rent")

        assert exc_info.value.field == "rent"
        assert exc_info.value.code == "VALIDATION_ERROR"


class TestRequirePositive:
    def test_positive(self):
        assert require_positive(Decimal("0.01")) == Decimal("0.01")

    @pytest.mark.parametrize("value", [Decimal("0"), Decimal("-5"), "-0.01"])
    def test_non_positive(self, value):
        with pytest.raises(ValidationError, match="greater than 0"):
            require_positive(value)


class TestRequireAmount:
    def test_nine_places_accepted(self):
        assert require_amount(Decimal("49999.999999999")) == Decimal("49999.999999999")

    def test_whole_amount_with_positive_exponent(self):
        assert require_amount(Decimal("5E+4"), "monthly_rent") == Decimal("50000")

    def test_more_than_nine_places_rejected(self):
        with pytest.raises(ValidationError, match="at most 9 decimal places") as exc_info:
            require_amount(Decimal("49999.9999999999"), "amount")

        assert exc_info.value.field == "amount"

    def test_trailing_zeros_past_nine_places_are_dropped(self):
        """1.0000000000 fits the column exactly, so it is kept at nine places."""
        amount = require_amount("1.0000000000", "price")

        assert amount == Decimal("1")
        assert amount.as_tuple().exponent == -9

    def test_smallest_fraction_below_nine_places_rejected(self):
        with pytest.raises(ValidationError, match="decimal places"):
            require_amount(Decimal("1E-10"))

    def test_largest_integer_part_accepted(self):
        amount = Decimal("9" * 29 + ".999999999")

        assert require_amount(amount) == amount

    @pytest.mark.parametrize("value", [Decimal("1E+29"), Decimal("1e30"), "1" + "0" * 29])
    def test_too_many_integer_digits_rejected(self, value):
        with pytest.raises(ValidationError, match="at most 29 integer digits"):
            require_amount(value, "amount")

    def test_still_requires_positive(self):
        with pytest.raises(ValidationError, match="greater than 0"):
            require_amount(Decimal("0.000000000"))


class TestRequireDate:
    def test_date(self):
        assert require_date(date(2024, 1, 1), "start") == date(2024, 1, 1)

    def test_datetime_is_a_date(self):
        assert require_date(datetime(2024, 1, 1, 10), "start")

    def test_missing(self):
        with pytest.raises(ValidationError, match="required"):
            require_date(None, "start")

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            require_date("2024-01-01", "start")


class TestNames:
    @pytest.mark.parametrize("value", ["Anna Petrova", "Jean-Luc Picard", "Анна Петрова", "Ёжиков"])
    def test_valid(self, value):
        assert validate_name(f"  {value} ") == value

    @pytest.mark.parametrize("value", ["", "   ", None, "R2D2", "Anna!"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_name(value)


class TestPhone:
    def test_optional(self):
        assert validate_phone(None) is None
        assert validate_phone("  ") is None

    def test_valid(self):
        assert validate_phone("+7 900 123-45-67") == "+7 900 123-45-67"

    def test_letters_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_phone("call me")

        assert exc_info.value.field == "phone"


class TestEmail:
    def test_optional(self):
        assert validate_email("") is None

    def test_valid(self):
        assert validate_email("anna@example.com") == "anna@example.com"

    @pytest.mark.parametrize("value", ["anna", "anna@example", "example.com"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_email(value)


class TestText:
    def test_valid(self):
        assert validate_text(" Studio 5 ", "title") == "Studio 5"

    @pytest.mark.parametrize("value", ["", "12345", "--- ---"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_text(value, "title")

        assert exc_info.value.field == "title"


class TestAddress:
    def test_valid(self):
        assert validate_address("12 Embankment St, apt. 4/2") == "12 Embankment St, apt. 4/2"

    @pytest.mark.parametrize("value", ["", "123", "Main St #5", "ab"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            validate_address(value)


class TestOptionalText:
    def test_blank_becomes_none(self):
        assert optional_text("   ") is None
        assert optional_text(None) is None

    def test_stripped(self):
        assert optional_text("  note ") == "note"
