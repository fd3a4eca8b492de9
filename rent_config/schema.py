"""
RentConfig schema.

Frozen dataclasses describing the runtime configuration of the rent
ledger.  YAML documents are parsed into these types by the loader; nothing
else in the system reads configuration files.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DisplayConfig:
    """How amounts and dates are rendered at the presentation boundary."""

    amount_places: int = 2
    date_format: str = "%d.%m.%Y"
    currency_symbol: str = ""


@dataclass(frozen=True)
class PolicyConfig:
    """Business rule switches."""

    # Refuse contracts whose end date precedes the start date.
    enforce_contract_dates: bool = True


@dataclass(frozen=True)
class RentConfig:
    """
    The active configuration.

    ``checksum`` is the SHA-256 of the merged source document and
    identifies exactly which configuration was in force.
    """

    database_url: str = "sqlite:///rent_ledger.db"
    log_level: str = "INFO"
    display: DisplayConfig = field(default_factory=DisplayConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    source: str | None = None
    checksum: str = ""
