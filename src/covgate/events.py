#
# src/covgate/events.py
#
"""
Normalized observations extracted from test runner output.

A classifier turns one unit of runner output into a tuple of these; the
aggregator consumes them in order.
"""

from enum import Enum
from typing import TypeAlias

from attrs import define, field


class Result(Enum):
    """Outcome reported by a package-level result event."""

    SUCCESS = "success"
    FAILURE = "failure"


@define(frozen=True, slots=True)
class PackageOutcome:
    """The runner reported that a package passed or failed."""

    package: str
    result: Result
    line: str


@define(frozen=True, slots=True)
class NoTestFiles:
    """The runner reported that a package has no test files."""

    package: str
    line: str


@define(frozen=True, slots=True)
class CoverageReport:
    """The runner reported statement coverage for a package that passed."""

    package: str
    coverage: float
    line: str


@define(frozen=True, slots=True)
class Passthrough:
    """Text to be shown to the user verbatim."""

    text: str
    package: str = field(default="")


@define(frozen=True, slots=True)
class Ignored:
    """An event that carries nothing of interest (skipped packages, quiet test output)."""

    line: str


@define(frozen=True, slots=True)
class Unrecognized:
    """Output the classifier could not make sense of."""

    line: str
    reason: str
    package: str | None = field(default=None)


Observation: TypeAlias = (
    PackageOutcome | NoTestFiles | CoverageReport | Passthrough | Ignored | Unrecognized
)


# 🔼⚙️
