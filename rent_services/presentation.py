"""
Text rendering at the presentation boundary.

The engines work on unrounded Decimals and on the ContractStatus variant.
This module is the only place either is turned into text: amounts are
quantized half-up to the configured number of places, dates use the
configured pattern, and statuses become ``Active``, ``Completed``,
``PaidInFull`` or ``Debt: <amount>``.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from rent_config.schema import DisplayConfig
from rent_engines.proration import ProrationSchedule
from rent_kernel.domain.status import ContractStatus, quantize_half_up
from rent_services.rent_ledger_service import ContractSummary


def quantize_amount(amount: Decimal, places: int) -> Decimal:
    return quantize_half_up(amount, places)


def format_amount(amount: Decimal, display: DisplayConfig | None = None) -> str:
    """Quantized amount, followed by the currency symbol when one is set."""
    display = display or DisplayConfig()
    text = f"{quantize_amount(amount, display.amount_places):f}"
    if display.currency_symbol:
        return f"{text} {display.currency_symbol}"
    return text


def format_date(value: date, display: DisplayConfig | None = None) -> str:
    display = display or DisplayConfig()
    return value.strftime(display.date_format)


def render_status(status: ContractStatus, display: DisplayConfig | None = None) -> str:
    display = display or DisplayConfig()
    return status.render(amount_places=display.amount_places)


def render_schedule(schedule: ProrationSchedule, display: DisplayConfig | None = None) -> str:
    """
    Render a schedule as a fixed-width table followed by its totals.

    Each row amount is rounded on its own, so the displayed rows may not add
    up to the displayed total by one minor unit.
    """
    display = display or DisplayConfig()
    header = ("Month", "Period", "Days", "Amount")
    body = [
        (
            row.month_label,
            row.period_label(display.date_format),
            str(row.days),
            format_amount(row.amount, display),
        )
        for row in schedule.rows
    ]
    widths = [
        max(len(line[i]) for line in [header, *body])
        for i in range(len(header))
    ]

    def fmt(line: tuple[str, ...]) -> str:
        return "  ".join(
            cell.rjust(widths[i]) if i >= 2 else cell.ljust(widths[i])
            for i, cell in enumerate(line)
        ).rstrip()

    lines = [fmt(header), "  ".join("-" * w for w in widths)]
    lines.extend(fmt(line) for line in body)
    lines.append("")
    lines.append(f"Total days: {schedule.total_days}")
    lines.append(f"Months: {schedule.months_count}")
    lines.append(f"Total: {format_amount(schedule.total_amount, display)}")
    return "\n".join(lines)


def render_summary(summary: ContractSummary, display: DisplayConfig | None = None) -> str:
    """Render the contract details view."""
    display = display or DisplayConfig()
    contract = summary.contract
    lines = [
        f"Tenant: {summary.tenant.full_name}",
        f"Landlord: {summary.landlord.full_name}",
        f"Property: {summary.rented_property.title} ({summary.rented_property.address})",
        "Term: "
        + format_date(contract.start_date, display)
        + " - "
        + format_date(contract.end_date, display),
        f"Monthly rent: {format_amount(contract.monthly_rent, display)}",
        f"Status: {render_status(summary.status, display)}",
        f"Paid total: {format_amount(summary.paid_total, display)}",
        f"Balance: {format_amount(summary.balance, display)}",
        "",
        "Payments:",
    ]
    if not summary.payments:
        lines.append("  (none)")
    for payment in summary.payments:
        entry = (
            f"  {format_date(payment.payment_date, display)}"
            f"  {payment.category.value:<9}"
            f"  {format_amount(payment.amount, display)}"
        )
        if payment.notes:
            entry += f"  {payment.notes}"
        lines.append(entry)
    return "\n".join(lines)
