"""
rent_config -- single public entrypoint for rent ledger configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration files
    directly.  Defaults ship in ``defaults.yaml`` next to this module; an
    optional user file is deep-merged over them.

Architecture position:
    Configuration.  This package sits beside ``rent_kernel`` and below
    ``rent_services``.  The kernel MUST NEVER import from ``rent_config``;
    services receive the values they need as constructor arguments.

Failure modes:
    - ``FileNotFoundError`` -- the user file does not exist.
    - ``yaml.YAMLError`` -- the user file is not valid YAML.
    - ``ValueError`` -- unknown keys or invalid values.

Every successful call emits a ``RENT_CONFIG_TRACE`` log entry.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rent_config.loader import deep_merge, load_yaml_file, parse_config
from rent_config.schema import DisplayConfig, PolicyConfig, RentConfig

_logger = logging.getLogger("rent_kernel.config")

_DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | str | None = None) -> RentConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: Optional YAML file whose values override the defaults.

    Returns:
        Frozen RentConfig.
    """
    data = load_yaml_file(_DEFAULTS_PATH)
    source = None
    if config_path is not None:
        path = Path(config_path)
        data = deep_merge(data, load_yaml_file(path))
        source = str(path)

    config = parse_config(data, source=source)

    _logger.info(
        "RENT_CONFIG_TRACE",
        extra={
            "trace_type": "RENT_CONFIG_TRACE",
            "config_source": source or "defaults",
            "checksum": config.checksum,
            "log_level": config.log_level,
            "enforce_contract_dates": config.policy.enforce_contract_dates,
        },
    )
    return config


__all__ = [
    "DisplayConfig",
    "PolicyConfig",
    "RentConfig",
    "get_active_config",
]
