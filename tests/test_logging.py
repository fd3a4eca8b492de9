"""Tests for structured JSON logging and LogContext."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from rent_kernel.domain.dtos import PaymentCategory
from rent_kernel.domain.status import ContractStatus, StatusKind
from rent_kernel.exceptions import EntityReferencedError, InvalidRangeError
from rent_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Each test configures logging itself; the suite configuration is restored after."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())


@pytest.fixture
def emitted():
    """Configure logging into a buffer and return a reader for the parsed records."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(handler=handler, level=logging.DEBUG)

    def _records() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return _records


log = get_logger("tests.logging")


class TestEnvelope:
    def test_envelope_fields(self, emitted):
        log.info("payment_added")

        (record,) = emitted()
        assert record["level"] == "INFO"
        assert record["message"] == "payment_added"
        assert record["logger"] == "rent_kernel.tests.logging"
        assert record["ts"].endswith("+00:00")

    def test_one_json_object_per_line(self, emitted):
        log.info("first")
        log.warning("second", extra={"k": "v"})
        log.debug("third")

        assert [r["message"] for r in emitted()] == ["first", "second", "third"]

    def test_level_threshold(self):
        """Default level is INFO, and level names are case-insensitive."""
        stream = StringIO()
        configure_logging(stream=stream, level="info")

        log.debug("dropped")
        log.info("kept")

        lines = stream.getvalue().splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["kept"]

    def test_does_not_reach_root_logger(self, emitted):
        """Kernel records stop at the kernel handler and skip the root logger's."""
        root_stream = StringIO()
        root_handler = logging.StreamHandler(root_stream)
        logging.getLogger().addHandler(root_handler)
        try:
            log.info("kernel_only")
        finally:
            logging.getLogger().removeHandler(root_handler)

        assert [r["message"] for r in emitted()] == ["kernel_only"]
        assert logging.getLogger("rent_kernel").propagate is False
        assert root_stream.getvalue() == ""


class TestExtraFields:
    def test_money_and_dates_are_text(self, emitted):
        """Amounts never pass through float on their way to the log."""
        log.info(
            "schedule_row",
            extra={"amount": Decimal("16451.6129"), "period_start": date(2024, 1, 15)},
        )

        (record,) = emitted()
        assert record["amount"] == "16451.6129"
        assert record["period_start"] == "2024-01-15"

    def test_uuid(self, emitted):
        payment_id = uuid4()

        log.info("payment_deleted", extra={"deleted_id": payment_id})

        assert emitted()[0]["deleted_id"] == str(payment_id)

    def test_enums_by_value(self, emitted):
        log.info(
            "categorised",
            extra={"category": PaymentCategory.UTILITIES, "kind": StatusKind.PAID_IN_FULL},
        )

        (record,) = emitted()
        assert record["category"] == "Utilities"
        assert record["kind"] == "paid_in_full"

    def test_contract_status_rendered(self, emitted):
        log.info("status", extra={"status": ContractStatus.debt(Decimal("30000"))})

        assert emitted()[0]["status"] == "Debt: 30000"


class TestExceptions:
    def test_plain_exception(self, emitted):
        try:
            raise ValueError("boom")
        except ValueError:
            log.error("failed", exc_info=True)

        (record,) = emitted()
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "exc_code" not in record
        assert "Traceback" in record["traceback"]

    def test_kernel_error_fields(self, emitted):
        try:
            raise InvalidRangeError(date(2024, 2, 10), date(2024, 1, 15))
        except InvalidRangeError:
            log.warning("range_rejected", exc_info=True)

        (record,) = emitted()
        assert record["exc_code"] == "INVALID_RANGE"
        assert record["exc_start"] == "2024-02-10"
        assert record["exc_end"] == "2024-01-15"

    def test_referenced_entity_fields(self, emitted):
        try:
            raise EntityReferencedError("party", "p-1")
        except EntityReferencedError:
            log.warning("party_delete_refused", exc_info=True)

        (record,) = emitted()
        assert record["exc_code"] == "ENTITY_REFERENCED"
        assert record["exc_entity_type"] == "party"
        assert record["exc_entity_id"] == "p-1"


class TestLogContext:
    def test_bound_ids_on_every_record(self, emitted):
        LogContext.set(correlation_id="run-7", contract_id="c-1")

        log.info("one")
        log.info("two")

        for record in emitted():
            assert record["correlation_id"] == "run-7"
            assert record["contract_id"] == "c-1"

    def test_absent_when_unset(self, emitted):
        log.info("bare")

        (record,) = emitted()
        assert not {"correlation_id", "contract_id", "payment_id", "actor_id"} & set(record)

    def test_context_wins_over_extra(self, emitted):
        with LogContext.bind(contract_id="from-context"):
            log.info("msg", extra={"contract_id": "from-extra"})

        assert emitted()[0]["contract_id"] == "from-context"

    def test_bind_nests_and_restores(self):
        LogContext.set(payment_id="outer")

        with LogContext.bind(payment_id="inner", contract_id="c-2"):
            assert LogContext.get_all() == {"contract_id": "c-2", "payment_id": "inner"}

        assert LogContext.get_all() == {"payment_id": "outer"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(contract_id="temp"):
                raise RuntimeError("inside")

        assert LogContext.get_all() == {}

    def test_none_values_are_ignored(self):
        LogContext.set(contract_id="kept")

        LogContext.set(contract_id=None, actor_id="cli")

        assert LogContext.get_all() == {"contract_id": "kept", "actor_id": "cli"}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="tenant_id"):
            LogContext.set(tenant_id="t-1")

    def test_clear(self):
        LogContext.set(correlation_id="x", payment_id="y")

        LogContext.clear()

        assert LogContext.get_all() == {}


class TestConfigureLogging:
    def test_second_call_is_ignored(self):
        first, second = logging.StreamHandler(StringIO()), logging.StreamHandler(StringIO())

        configure_logging(handler=first)
        configure_logging(handler=second)

        # pytest may attach its own capture handler; only ours are compared.
        ours = [
            h for h in logging.getLogger("rent_kernel").handlers
            if not type(h).__module__.startswith("_pytest")
        ]
        assert ours == [first]

    def test_child_loggers(self, emitted):
        """The engine tracer and config loggers write through the kernel handler."""
        logging.getLogger("rent_kernel.engines.tracer").debug("from_tracer")
        logging.getLogger("rent_kernel.config").info("from_config")

        assert [r["logger"] for r in emitted()] == [
            "rent_kernel.engines.tracer",
            "rent_kernel.config",
        ]

    def test_get_logger_namespace(self):
        assert get_logger("services.payment").name == "rent_kernel.services.payment"
