#
# src/covgate/exceptions.py
#
"""
Exception hierarchy for covgate.

Fatal errors (launch, stream and configuration problems) abort a run.
Verdict errors are collected per package and only judged once the runner
output has been fully consumed.
"""


class CovgateError(Exception):
    """Base class for all errors raised by covgate."""

    pass


class ConfigurationError(CovgateError):
    """Raised when the run configuration is invalid or inconsistent."""

    pass


class PackageCountMismatchError(ConfigurationError):
    """The number of observed packages differs from the expected count."""

    def __init__(self, expected: int, observed: list[str]):
        self.expected = expected
        self.observed = sorted(observed)
        super().__init__(
            f"Expected {expected} packages, but observed {len(self.observed)}: "
            f"[{', '.join(self.observed)}]"
        )


class LaunchError(CovgateError):
    """The test runner could not be started."""

    def __init__(self, message: str, details: Exception | None = None):
        self.details = details
        super().__init__(message)
        if details is not None:
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class RunnerExitError(CovgateError):
    """The test runner exited unsuccessfully without reporting a package failure."""

    def __init__(self, exit_code: int, stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        message = f"Test runner exited with code {exit_code}"
        tail = stderr.strip().splitlines()[-1:] if stderr else []
        if tail:
            message += f": {tail[0]}"
        super().__init__(message)


class RunnerOutputError(CovgateError):
    """The test runner's output could not be read; the runner has been stopped."""

    def __init__(self, message: str, details: Exception | None = None):
        self.details = details
        super().__init__(message)
        if details is not None:
            self.add_note(f"Original error: {type(details).__name__}: {details}")


# --- Fatal stream errors ---
class StreamError(CovgateError):
    """Base class for errors that halt processing of the runner output."""

    def __init__(self, message: str, package: str | None = None, lines: tuple[str, ...] = ()):
        self.package = package
        self.lines = lines
        super().__init__(message)


class ClassificationError(StreamError):
    """A unit of runner output could not be classified."""

    pass


class AggregationConflictError(StreamError):
    """Two observations established the same fact for one package."""

    pass


class DuplicateResultError(AggregationConflictError):
    def __init__(self, package: str, previous: str, new: str):
        super().__init__(
            f'Duplicate package results for "{package}": "{previous}", "{new}"',
            package=package,
            lines=(previous, new),
        )


class DuplicateCoverageError(AggregationConflictError):
    def __init__(self, package: str, previous: str, new: str):
        super().__init__(
            f'Duplicate package coverage for "{package}": "{previous}", "{new}"',
            package=package,
            lines=(previous, new),
        )


# --- Per-package verdict errors ---
class VerdictError(CovgateError):
    """A package did not meet the pass or coverage requirements."""

    def __init__(self, message: str, package: str):
        self.package = package
        super().__init__(message)


class TestFailureError(VerdictError):
    __test__ = False  # not a pytest test class

    def __init__(self, package: str):
        super().__init__(f"Tests failed for package: {package}", package)


class MissingCoverageError(VerdictError):
    def __init__(self, package: str):
        super().__init__(f"No coverage set for package: {package}", package)


class CoverageBelowThresholdError(VerdictError):
    def __init__(self, package: str, coverage: float, minimum: float):
        self.coverage = coverage
        self.minimum = minimum
        super().__init__(
            f'Coverage of package "{package}" ({percent_format(coverage)}) '
            f"must be at least {percent_format(minimum)}",
            package,
        )


def percent_format(value: float) -> str:
    return f"{value:3.1f}%"


# 🔼⚙️
