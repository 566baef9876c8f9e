#
# tests/unit/test_config.py
#
"""
Tests for the attrs configuration models.
"""

import logging

import pytest

from covgate.config import GlobalConfig, RunConfig
from covgate.exceptions import ConfigurationError


class TestRunConfig:
    def test_defaults(self) -> None:
        config = RunConfig()
        assert config.paths == (".",)
        assert config.min_coverage == 0.0
        assert config.output_format == "json"
        assert config.go_binary == "go"
        assert config.coverage_requested

    def test_lists_are_frozen_into_tuples(self) -> None:
        config = RunConfig(paths=["./a", "./b"], func_filter=["Un"])
        assert config.paths == ("./a", "./b")
        assert config.func_filter == ("Un",)
        assert not config.coverage_requested

    @pytest.mark.parametrize("value", [-0.1, 100.5])
    def test_min_coverage_range(self, value: float) -> None:
        with pytest.raises(ValueError, match="min_coverage"):
            RunConfig(min_coverage=value)

    @pytest.mark.parametrize("field_name", ["timeout", "expected_packages"])
    @pytest.mark.parametrize("value", [0, -3])
    def test_positive_ints(self, field_name: str, value: int) -> None:
        with pytest.raises(ValueError, match=field_name):
            RunConfig(**{field_name: value})

    def test_output_format(self) -> None:
        with pytest.raises(ValueError, match="output_format"):
            RunConfig(output_format="xml")

    def test_filter_and_coverage_gate_conflict(self) -> None:
        config = RunConfig(min_coverage=50, func_filter=("Un",))
        with pytest.raises(ConfigurationError, match="Cannot set func-filter and min coverage flags simultaneously"):
            config.validate()

    def test_filter_without_gate_is_valid(self) -> None:
        RunConfig(func_filter=("Un",)).validate()


class TestGlobalConfig:
    def test_numeric_log_level(self) -> None:
        assert GlobalConfig(log_level="debug").numeric_log_level == logging.DEBUG

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log_level"):
            GlobalConfig(log_level="LOUD")
