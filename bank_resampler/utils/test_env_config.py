"""Unit tests for environment variable configuration utilities."""

from __future__ import annotations

import pytest

from .env_config import EnvConfigError, apply_env_overrides, env_var_name, parse_env_value


class TestParseEnvValue:
    """Tests for parse_env_value function."""

    def test_parse_boolean_variants(self):
        for value in ["true", "YES", "1", "On"]:
            assert parse_env_value(value, False) is True, f"Failed for: {value}"
        for value in ["false", "NO", "0", "off"]:
            assert parse_env_value(value, True) is False, f"Failed for: {value}"

    def test_parse_boolean_invalid(self):
        with pytest.raises(EnvConfigError, match="Cannot parse .* as boolean"):
            parse_env_value("sometimes", False)

    def test_parse_integer(self):
        assert parse_env_value("44100", 48000) == 44100
        with pytest.raises(EnvConfigError, match="Cannot parse .* as integer"):
            parse_env_value("44.1k", 48000)

    def test_parse_float(self):
        assert parse_env_value("1.5", 0.0) == 1.5
        with pytest.raises(EnvConfigError, match="Cannot parse .* as float"):
            parse_env_value("fast", 0.0)

    def test_parse_null_variants(self):
        """Empty, null and none all clear the value."""
        assert parse_env_value("", "linear") is None
        assert parse_env_value("NULL", "linear") is None
        assert parse_env_value("None", "linear") is None

    def test_parse_string(self):
        assert parse_env_value("linear", "zero_order_hold") == "linear"
        assert parse_env_value("nearest", None) == "nearest"


class TestApplyEnvOverrides:
    """Tests for apply_env_overrides function."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        import os

        for key in list(os.environ):
            if key.startswith("BANKRS_"):
                monkeypatch.delenv(key)

    def test_no_env_vars_no_changes(self):
        config = {"system": {"log_level": "INFO"}}
        assert apply_env_overrides(config) == config

    def test_nested_override(self, monkeypatch):
        monkeypatch.setenv("BANKRS_RESAMPLE_TARGET_SAMPLE_RATE_HZ", "96000")
        monkeypatch.setenv("BANKRS_SWEEP_FAIL_FAST", "yes")
        config = {
            "resample": {"target_sample_rate_hz": 48000, "interpolation": "zero_order_hold"},
            "sweep": {"fail_fast": False},
        }
        result = apply_env_overrides(config)
        assert result["resample"]["target_sample_rate_hz"] == 96000
        assert result["resample"]["interpolation"] == "zero_order_hold"
        assert result["sweep"]["fail_fast"] is True
        # the input is not modified
        assert config["resample"]["target_sample_rate_hz"] == 48000

    def test_list_values_skipped(self, monkeypatch):
        monkeypatch.setenv("BANKRS_SWEEP_ONLY", '["pad"]')
        config = {"sweep": {"only": ["kick"]}}
        assert apply_env_overrides(config)["sweep"]["only"] == ["kick"]

    def test_invalid_env_value_raises_error(self, monkeypatch):
        monkeypatch.setenv("BANKRS_RESAMPLE_TARGET_BIT_DEPTH", "eight")
        with pytest.raises(EnvConfigError, match="Failed to parse environment variable"):
            apply_env_overrides({"resample": {"target_bit_depth": 16}})

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("CUSTOM_SYSTEM_LOG_LEVEL", "DEBUG")
        result = apply_env_overrides({"system": {"log_level": "INFO"}}, prefix="CUSTOM")
        assert result["system"]["log_level"] == "DEBUG"


def test_env_var_name():
    assert env_var_name(("resample", "target_bit_depth")) == "BANKRS_RESAMPLE_TARGET_BIT_DEPTH"
    assert env_var_name(("system", "log_level"), prefix="custom") == "CUSTOM_SYSTEM_LOG_LEVEL"
