import json
from pathlib import Path

import pytest

from covgate.testing.protocols import TestRunResult


def make_event(action: str, package: str = "p1", output: str | None = None, test: str | None = None) -> str:
    """Serializes a go test -json event the way the runner does."""
    event = {"Time": "2024-01-01T00:00:00Z", "Action": action, "Package": package}
    if test is not None:
        event["Test"] = test
    if output is not None:
        event["Output"] = output
    return json.dumps(event) + "\n"


def coverage_output(package: str, coverage: float) -> str:
    return f"ok {package} coverage: {coverage:0.2f}% of statements\n"


def no_test_output(package: str) -> str:
    return f"? {package} [no test files]\n"


class FakeTestRunner:
    """Replays canned output chunks instead of starting a process."""

    def __init__(
        self,
        stdout: list[str] | None = None,
        stderr: list[str] | None = None,
        exit_code: int = 0,
        error: Exception | None = None,
    ):
        self.stdout = stdout or []
        self.stderr = stderr or []
        self.exit_code = exit_code
        self.error = error
        self.calls: list[tuple[list[str], Path]] = []

    async def run_tests(self, command, working_dir, on_stdout, on_stderr=None) -> TestRunResult:
        self.calls.append((list(command), working_dir))
        if self.error is not None:
            raise self.error
        for chunk in self.stdout:
            on_stdout(chunk)
        for chunk in self.stderr:
            if on_stderr is not None:
                on_stderr(chunk)
        return TestRunResult(
            success=self.exit_code == 0,
            exit_code=self.exit_code,
            stdout="".join(self.stdout),
            stderr="".join(self.stderr),
        )


@pytest.fixture
def go_event():
    return make_event


@pytest.fixture
def coverage_event():
    def _coverage_event(package: str, coverage: float) -> str:
        return make_event("output", package, output=coverage_output(package, coverage))

    return _coverage_event


@pytest.fixture
def no_test_event():
    def _no_test_event(package: str) -> str:
        return make_event("output", package, output=no_test_output(package))

    return _no_test_event


@pytest.fixture
def fake_runner():
    """Factory for FakeTestRunner instances."""
    return FakeTestRunner


@pytest.fixture
def coverage_file(tmp_path: Path) -> Path:
    path = tmp_path / "coverage.out"
    path.touch()
    return path
