#
# src/covgate/state.py
#
"""
Per-package state tracked while consuming test runner output.
"""

from enum import Enum, auto

import structlog
from attrs import field, mutable

from covgate.events import Result
from covgate.exceptions import DuplicateCoverageError, DuplicateResultError

log: structlog.stdlib.BoundLogger = structlog.get_logger("state")


class Outcome(Enum):
    """Terminal outcome of a package under test."""

    UNSET = auto()
    SUCCESS = auto()
    FAILURE = auto()
    NO_TEST_FILES = auto()


RESULT_OUTCOMES = {
    Result.SUCCESS: Outcome.SUCCESS,
    Result.FAILURE: Outcome.FAILURE,
}


@mutable(slots=True)
class PackageRecord:
    """
    Everything learned about one package during a run.

    The outcome and the coverage are each settled exactly once. A coverage
    report implies success until an explicit result event confirms it; an
    explicit failure contradicts it.
    """

    name: str = field()
    outcome: Outcome = field(default=Outcome.UNSET)
    coverage: float | None = field(default=None)
    # Raw runner output that settled the outcome and the coverage.
    origin_line: str | None = field(default=None, repr=False)
    coverage_line: str | None = field(default=None, repr=False)
    _outcome_implied: bool = field(default=False, init=False, repr=False)

    def set_result(self, result: Result, line: str) -> None:
        """Records an explicit pass/fail result for the package."""
        outcome = RESULT_OUTCOMES[result]
        if self.outcome is Outcome.UNSET:
            self.outcome = outcome
            self.origin_line = line
        elif self._outcome_implied and outcome is Outcome.SUCCESS:
            self._outcome_implied = False
            self.origin_line = line
        else:
            raise DuplicateResultError(self.name, self.origin_line or "", line)
        log.debug("Package result recorded", package=self.name, outcome=self.outcome.name)

    def mark_no_test_files(self, line: str) -> None:
        """Records that the package has nothing to test; it can never carry coverage."""
        if self.coverage_line is not None:
            raise DuplicateCoverageError(self.name, self.coverage_line, line)
        if self.outcome is not Outcome.UNSET:
            raise DuplicateResultError(self.name, self.origin_line or "", line)
        self.outcome = Outcome.NO_TEST_FILES
        self.origin_line = line
        self.coverage_line = line
        log.debug("Package has no test files", package=self.name)

    def set_coverage(self, coverage: float, line: str) -> None:
        """Attaches a coverage percentage, implying success when no result was seen yet."""
        if self.coverage_line is not None:
            raise DuplicateCoverageError(self.name, self.coverage_line, line)
        if self.outcome is Outcome.FAILURE:
            raise DuplicateResultError(self.name, self.origin_line or "", line)
        self.coverage = coverage
        self.coverage_line = line
        if self.outcome is Outcome.UNSET:
            self.outcome = Outcome.SUCCESS
            self.origin_line = line
            self._outcome_implied = True
        log.debug("Package coverage recorded", package=self.name, coverage=coverage)

    @property
    def display_coverage(self) -> str:
        if self.coverage is None:
            return "-"
        return f"{self.coverage:3.1f}%"


# 🔼⚙️
