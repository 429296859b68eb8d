"""Tests for scan configuration."""

import pytest

from k8s_danger_scan.config import ENV_INCLUDE_MEDIUM, ENV_LOG_LEVEL, ScanConfig
from k8s_danger_scan.models import OutputFormat


class TestScanConfig:
    """Tests for ScanConfig."""

    def test_defaults(self):
        config = ScanConfig()
        assert config.include_medium is False
        assert config.output_format == OutputFormat.HUMAN
        assert config.log_level == "WARNING"

    def test_from_env_empty(self):
        config = ScanConfig.from_env({})
        assert config == ScanConfig()

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", " on "])
    def test_include_medium_from_env(self, value):
        config = ScanConfig.from_env({ENV_INCLUDE_MEDIUM: value})
        assert config.include_medium is True

    @pytest.mark.parametrize("value", ["0", "false", "", "maybe"])
    def test_include_medium_falsy_env(self, value):
        config = ScanConfig.from_env({ENV_INCLUDE_MEDIUM: value})
        assert config.include_medium is False

    def test_log_level_from_env(self):
        config = ScanConfig.from_env({ENV_LOG_LEVEL: "debug"})
        assert config.log_level == "DEBUG"

    def test_dict_overrides_env(self):
        config = ScanConfig.from_dict(
            {"include_medium": False, "log_level": "error"},
            environ={ENV_INCLUDE_MEDIUM: "true", ENV_LOG_LEVEL: "DEBUG"},
        )
        assert config.include_medium is False
        assert config.log_level == "ERROR"

    def test_output_format_from_string(self):
        config = ScanConfig.from_dict({"output_format": "JSON"}, environ={})
        assert config.output_format == OutputFormat.JSON

    def test_invalid_output_format(self):
        with pytest.raises(ValueError):
            ScanConfig.from_dict({"output_format": "xml"}, environ={})

    def test_to_dict(self):
        config = ScanConfig(include_medium=True, output_format=OutputFormat.JSON)
        assert config.to_dict() == {
            "include_medium": True,
            "output_format": "json",
            "log_level": "WARNING",
        }

    def test_round_trip_through_dict(self):
        config = ScanConfig(include_medium=True, output_format=OutputFormat.JSON, log_level="INFO")
        assert ScanConfig.from_dict(config.to_dict(), environ={}) == config
