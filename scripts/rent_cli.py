#!/usr/bin/env python3
"""
Rent ledger command line.

Usage:
    rent-ledger schedule 2024-01-15 2024-02-10 30000
    rent-ledger --config my.yaml init-db
    rent-ledger refresh                  # mark expired contracts Completed
    rent-ledger summary <contract-id>

Dates are ISO (YYYY-MM-DD) or DD.MM.YYYY.  Exit status is 0 on success,
2 on a usage error and 1 when the ledger rejects the request.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from rent_config import get_active_config
from rent_engines.proration import compute_schedule
from rent_kernel.db.engine import create_tables, init_engine_from_url, session_scope
from rent_kernel.domain.clock import SystemClock
from rent_kernel.exceptions import RentKernelError
from rent_kernel.logging_config import configure_logging, get_logger
from rent_services.presentation import format_date, render_schedule, render_status, render_summary
from rent_services.rent_ledger_service import RentLedgerService

logger = get_logger("cli")


def _parse_date(text: str) -> date:
    for parse in (date.fromisoformat, lambda s: datetime.strptime(s, "%d.%m.%Y").date()):
        try:
            return parse(text)
        except ValueError:
            continue
    raise argparse.ArgumentTypeError(f"not a date: {text!r} (use YYYY-MM-DD or DD.MM.YYYY)")


def _parse_amount(text: str) -> Decimal:
    try:
        return Decimal(text.replace(",", ".").replace(" ", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not an amount: {text!r}") from None


def _parse_uuid(text: str) -> UUID:
    try:
        return UUID(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a contract id: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rent-ledger", description="Rent ledger tools")
    parser.add_argument("--config", default=None, help="YAML file merged over the defaults")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    sub = parser.add_subparsers(dest="command", required=True)

    schedule = sub.add_parser("schedule", help="Prorate rent over a period")
    schedule.add_argument("start", type=_parse_date)
    schedule.add_argument("end", type=_parse_date)
    schedule.add_argument("rent", type=_parse_amount)

    sub.add_parser("init-db", help="Create the database tables")
    sub.add_parser("refresh", help="Mark contracts whose end date has passed as Completed")

    summary = sub.add_parser("summary", help="Show a contract with its payments")
    summary.add_argument("contract_id", type=_parse_uuid)

    return parser


def _cmd_schedule(args, config) -> None:
    schedule = compute_schedule(args.start, args.end, args.rent)
    print(render_schedule(schedule, config.display))


def _cmd_init_db(args, config) -> None:
    init_engine_from_url(config.database_url)
    create_tables()
    print(f"Tables ready in {config.database_url}")


def _cmd_refresh(args, config) -> None:
    init_engine_from_url(config.database_url)
    with session_scope() as session:
        changed = RentLedgerService(session, SystemClock(), config).refresh_expired_contracts()
        for contract in changed:
            print(
                f"{contract.id}  ended {format_date(contract.end_date, config.display)}"
                f"  -> {render_status(contract.status, config.display)}"
            )
    print(f"{len(changed)} contract(s) updated")


def _cmd_summary(args, config) -> None:
    init_engine_from_url(config.database_url)
    with session_scope() as session:
        summary = RentLedgerService(session, SystemClock(), config).contract_summary(
            args.contract_id
        )
        print(render_summary(summary, config.display))


_COMMANDS = {
    "schedule": _cmd_schedule,
    "init-db": _cmd_init_db,
    "refresh": _cmd_refresh,
    "summary": _cmd_summary,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_active_config(args.config)
    configure_logging(level=args.log_level or config.log_level)

    try:
        _COMMANDS[args.command](args, config)
    except RentKernelError as exc:
        logger.warning("command_rejected", exc_info=True, extra={"command": args.command})
        print(f"error: {exc.code}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
