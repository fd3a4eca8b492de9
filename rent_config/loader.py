"""
Configuration Loader (``rent_config.loader``).

Responsibility
--------------
Loads YAML documents and parses them into typed ``rent_config.schema``
dataclass instances.  Callers should use ``rent_config.get_active_config()``
rather than this module.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` with descriptive messages; unknown keys
  are rejected rather than silently ignored.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from rent_config.schema import DisplayConfig, PolicyConfig, RentConfig

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())

_TOP_LEVEL_KEYS = frozenset({"database_url", "log_level", "display", "policy"})
_DISPLAY_KEYS = frozenset({"amount_places", "date_format", "currency_symbol"})
_POLICY_KEYS = frozenset({"enforce_contract_dates"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in; nested mappings merge recursively."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _reject_unknown(data: dict[str, Any], allowed: frozenset[str], section: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"Unknown {section} key(s): {', '.join(unknown)}")


def parse_display(data: dict[str, Any]) -> DisplayConfig:
    """Parse the ``display`` section."""
    _reject_unknown(data, _DISPLAY_KEYS, "display")
    places = data.get("amount_places", 2)
    if isinstance(places, bool) or not isinstance(places, int) or places < 0:
        raise ValueError(f"display.amount_places must be a non-negative integer, got {places!r}")
    date_format = data.get("date_format", "%d.%m.%Y")
    if not isinstance(date_format, str) or "%" not in date_format:
        raise ValueError(f"display.date_format must be a strftime pattern, got {date_format!r}")
    symbol = data.get("currency_symbol") or ""
    return DisplayConfig(
        amount_places=places,
        date_format=date_format,
        currency_symbol=str(symbol),
    )


def parse_policy(data: dict[str, Any]) -> PolicyConfig:
    """Parse the ``policy`` section."""
    _reject_unknown(data, _POLICY_KEYS, "policy")
    enforce = data.get("enforce_contract_dates", True)
    if not isinstance(enforce, bool):
        raise ValueError(f"policy.enforce_contract_dates must be a boolean, got {enforce!r}")
    return PolicyConfig(enforce_contract_dates=enforce)


def parse_config(data: dict[str, Any], source: str | None = None) -> RentConfig:
    """
    Parse a merged configuration document.

    Raises:
        ValueError: on unknown keys or invalid values.
    """
    _reject_unknown(data, _TOP_LEVEL_KEYS, "top-level")

    database_url = data.get("database_url")
    if not isinstance(database_url, str) or not database_url.strip():
        raise ValueError("database_url must be a non-empty string")

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"log_level must be one of the logging level names, got {log_level!r}")

    return RentConfig(
        database_url=database_url.strip(),
        log_level=log_level,
        display=parse_display(data.get("display") or {}),
        policy=parse_policy(data.get("policy") or {}),
        source=source,
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
