"""Tests for the ContractStatus variant."""

from decimal import Decimal

import pytest

from rent_kernel.domain.status import ContractStatus, StatusKind


class TestConstruction:
    def test_named_constructors(self):
        assert ContractStatus.active().kind == StatusKind.ACTIVE
        assert ContractStatus.completed().kind == StatusKind.COMPLETED
        assert ContractStatus.paid_in_full().kind == StatusKind.PAID_IN_FULL
        assert ContractStatus.debt(Decimal("1")).debt_amount == Decimal("1")

    def test_debt_requires_positive_amount(self):
        with pytest.raises(ValueError):
            ContractStatus.debt(Decimal("0"))

    def test_debt_requires_decimal(self):
        with pytest.raises(TypeError):
            ContractStatus.debt(100.0)

    def test_only_debt_carries_amount(self):
        with pytest.raises(ValueError):
            ContractStatus(StatusKind.ACTIVE, Decimal("5"))

    def test_value_equality(self):
        """Statuses compare by value, so the policy can detect no-op changes."""
        assert ContractStatus.debt(Decimal("10")) == ContractStatus.debt(Decimal("10.00"))
        assert ContractStatus.active() != ContractStatus.paid_in_full()
        assert len({ContractStatus.active(), ContractStatus.active()}) == 1


class TestRendering:
    @pytest.mark.parametrize(
        "status, text",
        [
            (ContractStatus.active(), "Active"),
            (ContractStatus.completed(), "Completed"),
            (ContractStatus.paid_in_full(), "PaidInFull"),
        ],
    )
    def test_plain_labels(self, status, text):
        assert str(status) == text

    def test_debt_raw(self):
        assert str(ContractStatus.debt(Decimal("30000"))) == "Debt: 30000"

    def test_debt_quantized(self):
        status = ContractStatus.debt(Decimal("1234.565"))

        assert status.render(amount_places=2) == "Debt: 1234.57"

    def test_debt_quantized_beyond_default_precision(self):
        status = ContractStatus.debt(Decimal("12345678901234567890123456789.5"))

        assert status.render(amount_places=2) == "Debt: 12345678901234567890123456789.50"
        assert status.render(amount_places=0) == "Debt: 12345678901234567890123456790"

    def test_label_drops_amount(self):
        assert ContractStatus.debt(Decimal("5")).label == "Debt"

    def test_terminal(self):
        assert ContractStatus.completed().is_terminal
        assert not ContractStatus.debt(Decimal("5")).is_terminal
