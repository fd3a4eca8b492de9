"""
Pytest fixtures for the rent ledger test suite.

Provides:
- Structured logging configured once per session, log context cleared per test
- ``captured_logs`` for asserting on emitted JSON log records
- A fresh in-memory SQLite database per test
- A deterministic clock and seeded tenants, landlords and properties
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from rent_config.schema import PolicyConfig, RentConfig
from rent_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from rent_kernel.domain.clock import DeterministicClock
from rent_kernel.domain.dtos import PartyType
from rent_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from rent_kernel.services.party_service import PartyService
from rent_kernel.services.property_service import PropertyService
from rent_services.rent_ledger_service import RentLedgerService

TODAY = date(2024, 1, 20)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture rent_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, ledger_service):
            ledger_service.add_payment(...)
            logs = captured_logs()
            assert any(r["message"] == "payment_added" for r in logs)
    """
    buffer = StringIO()
    capture = logging.StreamHandler(buffer)
    capture.setFormatter(StructuredFormatter())
    kernel_logger = logging.getLogger("rent_kernel")
    kernel_logger.addHandler(capture)

    def _records() -> list[dict]:
        return [json.loads(line) for line in buffer.getvalue().splitlines() if line]

    yield _records

    kernel_logger.removeHandler(capture)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def session():
    """A session bound to a fresh in-memory SQLite database."""
    init_engine_from_url("sqlite://")
    create_tables()
    db_session = get_session()
    yield db_session
    db_session.rollback()
    db_session.close()
    reset_engine()


@pytest.fixture
def clock():
    return DeterministicClock(TODAY)


@pytest.fixture
def config():
    return RentConfig()


@pytest.fixture
def lenient_config():
    """Configuration that lets a contract end before it starts."""
    return RentConfig(policy=PolicyConfig(enforce_contract_dates=False))


# =============================================================================
# Seed records
# =============================================================================


@pytest.fixture
def tenant(session):
    return PartyService(session).add_party(
        PartyType.TENANT,
        "Anna Petrova",
        phone="+7 900 123-45-67",
        email="anna@example.com",
    )


@pytest.fixture
def landlord(session):
    return PartyService(session).add_party(PartyType.LANDLORD, "Ivan Sokolov")


@pytest.fixture
def flat(session):
    return PropertyService(session).add_property(
        title="Riverside flat",
        address="12 Embankment St, apt. 4",
        area=Decimal("54.5"),
        price=Decimal("50000"),
    )


@pytest.fixture
def ledger_service(session, clock, config):
    return RentLedgerService(session, clock, config)


@pytest.fixture
def make_contract(ledger_service, tenant, landlord, flat):
    """Factory for contracts between the seeded tenant, landlord and flat."""

    def _make(
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 12, 31),
        monthly_rent: Decimal = Decimal("50000"),
    ):
        return ledger_service.create_contract(
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            property_id=flat.id,
            start_date=start_date,
            end_date=end_date,
            monthly_rent=monthly_rent,
        )

    return _make
