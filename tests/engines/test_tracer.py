"""Tests for the @traced_engine decorator and input fingerprints."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from rent_engines.proration import compute_schedule
from rent_engines.tracer import compute_input_fingerprint, traced_engine
from rent_kernel.domain.dtos import PaymentCategory
from rent_kernel.exceptions import InvalidRangeError


@dataclass(frozen=True)
class _Row:
    amount: Decimal
    on: date


def _traces(captured_logs) -> list[dict]:
    return [r for r in captured_logs() if r["message"] == "RENT_ENGINE_TRACE"]


class TestFingerprint:
    def test_money_scale_does_not_matter(self):
        """A rent read back from the database hashes like the one entered."""
        entered = compute_input_fingerprint(("rent",), {"rent": Decimal("50000")})
        stored = compute_input_fingerprint(("rent",), {"rent": Decimal("50000.000000000")})

        assert entered == stored

    def test_different_inputs_differ(self):
        a = compute_input_fingerprint(("rent",), {"rent": Decimal("50000")})
        b = compute_input_fingerprint(("rent",), {"rent": Decimal("50001")})

        assert a != b

    def test_large_amounts_not_rounded_together(self):
        """Amounts wider than 28 digits still hash by their exact value."""
        whole = "9" * 29
        a = compute_input_fingerprint(("amount",), {"amount": Decimal(whole + ".999999998")})
        b = compute_input_fingerprint(("amount",), {"amount": Decimal(whole + ".999999999")})

        assert a != b

    def test_dataclasses_expanded(self):
        one = _Row(Decimal("1.0"), date(2024, 1, 1))
        same = _Row(Decimal("1"), date(2024, 1, 1))

        assert compute_input_fingerprint(("row",), {"row": one}) == compute_input_fingerprint(
            ("row",), {"row": same}
        )

    def test_enum_by_value(self):
        by_enum = compute_input_fingerprint(("c",), {"c": PaymentCategory.RENT})
        by_text = compute_input_fingerprint(("c",), {"c": "Rent"})

        assert by_enum == by_text

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(
            ("x",), {"x": None}
        )


class TestTracedEngine:
    def test_ok_outcome(self, captured_logs):
        compute_schedule(date(2024, 1, 1), date(2024, 1, 31), Decimal("100"))

        (trace,) = _traces(captured_logs)
        assert trace["outcome"] == "ok"
        assert trace["engine_version"] == "1.0"
        assert trace["function"] == "compute_schedule"
        assert trace["duration_ms"] >= 0

    def test_error_outcome_and_reraise(self, captured_logs):
        with pytest.raises(InvalidRangeError):
            compute_schedule(date(2024, 2, 1), date(2024, 1, 1), Decimal("100"))

        (trace,) = _traces(captured_logs)
        assert trace["outcome"] == "error"
        assert trace["error_code"] == "INVALID_RANGE"

    def test_result_and_metadata_preserved(self):
        @traced_engine("double", "2.0", fingerprint_fields=("value",))
        def double(value):
            """Twice the value."""
            return value * 2

        assert double(Decimal("2.5")) == Decimal("5.0")
        assert double.__name__ == "double"
        assert double.__doc__ == "Twice the value."
