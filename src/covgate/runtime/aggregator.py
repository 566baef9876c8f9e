#
# src/covgate/runtime/aggregator.py
#
"""
Consumes classified runner output, tracks per-package state and computes the
final verdict.
"""

import re
from collections.abc import Callable
from functools import partial

import click
import structlog
from attrs import define, field

from covgate.events import (
    CoverageReport,
    Ignored,
    NoTestFiles,
    Observation,
    PackageOutcome,
    Passthrough,
    Unrecognized,
)
from covgate.exceptions import (
    ClassificationError,
    CoverageBelowThresholdError,
    MissingCoverageError,
    PackageCountMismatchError,
    StreamError,
    TestFailureError,
    VerdictError,
)
from covgate.runtime.classifier import Classifier
from covgate.state import Outcome, PackageRecord
from covgate.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.aggregator")

# Only "\n" ends a unit; str.splitlines would also break on U+0085, U+2028 and friends.
LINE_END = re.compile(r"(?<=\n)")


def split_lines(chunk: str) -> list[str]:
    """Splits a chunk into newline-terminated units, keeping the line endings."""
    return [piece for piece in LINE_END.split(chunk) if piece]


@define(frozen=True, slots=True)
class Verdict:
    """Final judgement over all packages seen during a run."""

    packages: dict[str, PackageRecord] = field(factory=dict)
    errors: tuple[VerdictError, ...] = field(default=())

    @property
    def error(self) -> VerdictError | None:
        """The error that decides the exit status: the last one in package order."""
        return self.errors[-1] if self.errors else None

    @property
    def passed(self) -> bool:
        return not self.errors


class ResultAggregator:
    """
    Applies observations to per-package records.

    Passthrough text is written as soon as it is seen. The first fatal stream
    error is kept in ``self.error`` and everything after it is dropped.
    """

    def __init__(
        self,
        classifier: Classifier,
        write: Callable[[str], None] | None = None,
    ):
        self.classifier = classifier
        self.write = write or partial(click.echo, nl=False)
        self.packages: dict[str, PackageRecord] = {}
        self.error: StreamError | None = None

    def feed(self, chunk: str) -> None:
        """Classifies and applies every line contained in a chunk of runner output."""
        if self.error is not None:
            return

        for unit in split_lines(chunk):
            for observation in self.classifier.classify(unit):
                try:
                    self.apply(observation)
                except StreamError as e:
                    log.warning("Stopped processing runner output", error=str(e), package=e.package)
                    self.error = e
                    return

    def apply(self, observation: Observation) -> None:
        """Applies a single observation; raises StreamError on a fatal conflict."""
        if isinstance(observation, Passthrough):
            self.write(observation.text)
        elif isinstance(observation, PackageOutcome):
            self._record(observation.package).set_result(observation.result, observation.line)
        elif isinstance(observation, NoTestFiles):
            self._record(observation.package).mark_no_test_files(observation.line)
        elif isinstance(observation, CoverageReport):
            self._record(observation.package).set_coverage(observation.coverage, observation.line)
        elif isinstance(observation, Ignored):
            pass
        elif isinstance(observation, Unrecognized):
            raise ClassificationError(
                observation.reason, package=observation.package, lines=(observation.line,)
            )
        else:
            raise TypeError(f"Unsupported observation: {observation!r}")

    def _record(self, package: str) -> PackageRecord:
        record = self.packages.get(package)
        if record is None:
            record = self.packages[package] = PackageRecord(name=package)
            log.debug("Tracking new package", package=package)
        return record

    def has_failures(self) -> bool:
        return any(r.outcome is Outcome.FAILURE for r in self.packages.values())

    def finalize(
        self,
        min_coverage: float = 0.0,
        expected_packages: int | None = None,
        check_coverage: bool = True,
    ) -> Verdict:
        """
        Judges every package once the runner output has ended.

        Args:
            min_coverage: Required statement coverage percentage per package.
            expected_packages: If given, the exact number of distinct packages
                that must have been observed.
            check_coverage: Whether coverage was requested from the runner at
                all; when it was not, coverage is not judged. Runs narrowed by a
                test-name filter collect no coverage, so only their outcomes
                count; with the default every successful package must carry
                coverage.

        Returns:
            The Verdict. Its ``error`` is the last per-package problem found.

        Raises:
            StreamError: A fatal error occurred while consuming the output.
            PackageCountMismatchError: The package count does not match.
        """
        if self.error is not None:
            raise self.error

        if expected_packages is not None and expected_packages != len(self.packages):
            raise PackageCountMismatchError(expected_packages, list(self.packages))

        errors: list[VerdictError] = []
        for name in sorted(self.packages):
            record = self.packages[name]
            if record.outcome is Outcome.NO_TEST_FILES:
                continue
            if record.outcome is Outcome.FAILURE:
                errors.append(TestFailureError(name))
                continue
            if not check_coverage:
                continue
            if record.coverage is None:
                errors.append(MissingCoverageError(name))
                continue
            if record.coverage < min_coverage:
                errors.append(CoverageBelowThresholdError(name, record.coverage, min_coverage))

        for error in errors:
            log.info("Package verdict failed", package=error.package, error=str(error))
        log.debug("Verdict computed", packages=len(self.packages), errors=len(errors))
        return Verdict(packages=dict(self.packages), errors=tuple(errors))


# 🔼⚙️
