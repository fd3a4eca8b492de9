"""
Tests for the rent-ledger command line.

The database commands run against a SQLite file configured through a
--config YAML file, the same way an operator would.
"""

from datetime import date
from decimal import Decimal

import pytest

from rent_kernel.db.engine import reset_engine, session_scope
from rent_kernel.domain.dtos import PartyType
from rent_services.rent_ledger_service import RentLedgerService
from scripts.rent_cli import main


@pytest.fixture
def config_file(tmp_path):
    db_path = tmp_path / "ledger.db"
    path = tmp_path / "rent.yaml"
    path.write_text(f'database_url: "sqlite:///{db_path.as_posix()}"\n', encoding="utf-8")
    yield path
    reset_engine()


def _seed_contract(clock) -> str:
    with session_scope() as session:
        service = RentLedgerService(session, clock)
        tenant = service.parties.add_party(PartyType.TENANT, "Anna Petrova")
        landlord = service.parties.add_party(PartyType.LANDLORD, "Ivan Sokolov")
        flat = service.properties.add_property(
            title="Riverside flat",
            address="12 Embankment St",
            area=Decimal("54.5"),
            price=Decimal("50000"),
        )
        contract = service.create_contract(
            tenant_id=tenant.id,
            landlord_id=landlord.id,
            property_id=flat.id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            monthly_rent=Decimal("50000"),
        )
        service.add_payment(contract.id, date(2024, 1, 5), Decimal("20000"), "Rent")
        return str(contract.id)


class TestSchedule:
    def test_prints_table_and_totals(self, capsys):
        assert main(["schedule", "2024-01-15", "2024-02-10", "30000"]) == 0

        out = capsys.readouterr().out
        assert out.splitlines()[0].split() == ["Month", "Period", "Days", "Amount"]
        assert "01.2024" in out
        assert "02.2024" in out
        assert "Total days: 27" in out
        assert "Months: 2" in out

    def test_accepts_day_first_dates(self, capsys):
        assert main(["schedule", "01.02.2024", "29.02.2024", "50000"]) == 0

        assert "Total: 50000.00" in capsys.readouterr().out

    def test_reversed_range_is_rejected(self, capsys):
        assert main(["schedule", "2024-02-10", "2024-01-15", "30000"]) == 1

        assert capsys.readouterr().err.startswith("error: ")

    def test_bad_amount_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["schedule", "2024-01-01", "2024-01-31", "lots"])

        assert exc_info.value.code == 2
        assert "not an amount" in capsys.readouterr().err


class TestDatabaseCommands:
    def test_init_refresh_and_summary(self, config_file, clock, capsys):
        assert main(["--config", str(config_file), "init-db"]) == 0
        contract_id = _seed_contract(clock)
        capsys.readouterr()

        # the system clock is well past the contract's end date
        assert main(["--config", str(config_file), "refresh"]) == 0
        assert "1 contract(s) updated" in capsys.readouterr().out

        assert main(["--config", str(config_file), "summary", contract_id]) == 0
        out = capsys.readouterr().out
        assert "Tenant: Anna Petrova" in out
        assert "Property: Riverside flat" in out
        assert "Completed" in out
        assert "20000.00" in out

    def test_summary_of_unknown_contract(self, config_file, capsys):
        main(["--config", str(config_file), "init-db"])

        code = main([
            "--config", str(config_file),
            "summary", "00000000-0000-0000-0000-000000000000",
        ])

        assert code == 1
        assert "error: " in capsys.readouterr().err
