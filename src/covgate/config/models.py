#
# config/models.py
#
"""
Attrs-based data models for covgate run configuration.
"""

import logging
from typing import Any

from attrs import define, field

from covgate.exceptions import ConfigurationError

OUTPUT_FORMATS = ("json", "text")


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging._nameToLevel.keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_optional_positive_int(inst: Any, attr: Any, value: int | None) -> None:
    """Validator ensures integer, when given, is positive."""
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


def _validate_percentage(inst: Any, attr: Any, value: float) -> None:
    if not 0 <= value <= 100:
        raise ValueError(f"Field '{attr.name}' must be between 0 and 100, got {value}")


def _validate_output_format(inst: Any, attr: Any, value: str) -> None:
    if value not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output_format '{value}'. Must be one of {list(OUTPUT_FORMATS)}.")


@define(frozen=True, slots=True)
class RunConfig:
    """Everything needed to invoke the test runner and judge its output."""

    paths: tuple[str, ...] = field(default=(".",), converter=tuple)
    verbose: bool = field(default=False)
    min_coverage: float = field(default=0.0, converter=float, validator=_validate_percentage)
    timeout: int | None = field(default=None, validator=_validate_optional_positive_int)
    func_filter: tuple[str, ...] = field(default=(), converter=tuple)
    expected_packages: int | None = field(default=None, validator=_validate_optional_positive_int)
    output_format: str = field(default="json", validator=_validate_output_format)
    go_binary: str = field(default="go")

    @property
    def coverage_requested(self) -> bool:
        """Coverage is only collected when no test-name filter narrows the run."""
        return not self.func_filter

    def validate(self) -> None:
        """Rejects option combinations that cannot be honoured together."""
        if self.func_filter and self.min_coverage > 0.0:
            raise ConfigurationError("Cannot set func-filter and min coverage flags simultaneously")


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global settings for covgate."""

    log_level: str = field(default="WARNING", validator=_validate_log_level)
    json_logs: bool = field(default=False)
    log_file: str | None = field(default=None)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())


# 🔼⚙️
