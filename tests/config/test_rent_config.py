"""
Tests for configuration loading.

Covers:
- Built-in defaults
- Deep merge of a user YAML file
- Rejection of unknown keys and invalid values
- RENT_CONFIG_TRACE emission
"""

from dataclasses import FrozenInstanceError

import pytest
import yaml

from rent_config import get_active_config
from rent_config.loader import compute_checksum, deep_merge, parse_config


@pytest.fixture
def write_config(tmp_path):
    def _write(data) -> str:
        path = tmp_path / "rent.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return str(path)

    return _write


class TestDefaults:
    def test_default_values(self):
        config = get_active_config()

        assert config.database_url == "sqlite:///rent_ledger.db"
        assert config.log_level == "INFO"
        assert config.display.amount_places == 2
        assert config.display.date_format == "%d.%m.%Y"
        assert config.display.currency_symbol == ""
        assert config.policy.enforce_contract_dates is True
        assert config.source is None
        assert len(config.checksum) == 64

    def test_frozen(self):
        config = get_active_config()

        with pytest.raises(FrozenInstanceError):
            config.log_level = "DEBUG"


class TestUserFile:
    def test_partial_override_keeps_siblings(self, write_config):
        """Overriding one display key leaves the others at their defaults."""
        path = write_config({"display": {"currency_symbol": "RUB"}, "log_level": "debug"})

        config = get_active_config(path)

        assert config.display.currency_symbol == "RUB"
        assert config.display.amount_places == 2
        assert config.log_level == "DEBUG"
        assert config.source == path

    def test_disable_date_guard(self, write_config):
        path = write_config({"policy": {"enforce_contract_dates": False}})

        assert get_active_config(path).policy.enforce_contract_dates is False

    def test_checksum_tracks_content(self, write_config):
        default = get_active_config()
        custom = get_active_config(write_config({"database_url": "sqlite://"}))

        assert default.checksum != custom.checksum

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")

    def test_empty_file_means_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert get_active_config(path).database_url == "sqlite:///rent_ledger.db"

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            get_active_config(path)


class TestValidation:
    @pytest.mark.parametrize(
        "data, message",
        [
            ({"colour": "red"}, "Unknown top-level"),
            ({"display": {"width": 3}}, "Unknown display"),
            ({"display": {"amount_places": -1}}, "amount_places"),
            ({"display": {"amount_places": True}}, "amount_places"),
            ({"display": {"date_format": "dd.MM.yyyy"}}, "date_format"),
            ({"policy": {"enforce_contract_dates": "yes"}}, "enforce_contract_dates"),
            ({"log_level": "LOUD"}, "log_level"),
            ({"database_url": ""}, "database_url"),
        ],
    )
    def test_invalid(self, write_config, data, message):
        with pytest.raises(ValueError, match=message):
            get_active_config(write_config(data))


class TestLoaderHelpers:
    def test_deep_merge(self):
        merged = deep_merge({"a": {"x": 1, "y": 2}, "b": 1}, {"a": {"y": 3}, "c": 4})

        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_checksum_is_order_independent(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_parse_requires_database_url(self):
        with pytest.raises(ValueError):
            parse_config({})


class TestTrace:
    def test_config_trace_emitted(self, captured_logs):
        config = get_active_config()

        traces = [r for r in captured_logs() if r["message"] == "RENT_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0]["checksum"] == config.checksum
        assert traces[0]["config_source"] == "defaults"
