#
# tests/unit/test_gate.py
#
"""
Tests for CoverageGate, which ties the runner, classifier and aggregator together.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from covgate.config import RunConfig
from covgate.exceptions import (
    ClassificationError,
    ConfigurationError,
    DuplicateResultError,
    LaunchError,
    PackageCountMismatchError,
    RunnerExitError,
    TestFailureError,
)
from covgate.testing.gate import CoverageGate, create_coverage_file


def make_gate(runner, config: RunConfig, coverage_file: Path | None = None, **kwargs):
    stdout: list[str] = []
    stderr: list[str] = []
    factory = kwargs.pop("tmp_file_factory", None) or (lambda: coverage_file)
    gate = CoverageGate(
        runner,
        config,
        write=stdout.append,
        write_err=stderr.append,
        tmp_file_factory=factory,
    )
    return gate, stdout, stderr


@pytest.mark.asyncio
class TestCoverageGate:
    async def test_passing_run(self, fake_runner, go_event, coverage_event, coverage_file, tmp_path) -> None:
        runner = fake_runner(stdout=[go_event("pass"), coverage_event("p1", 80.0)])
        gate, stdout, _ = make_gate(runner, RunConfig(min_coverage=75), coverage_file)

        verdict = await gate.run(tmp_path)

        assert verdict.passed
        command, working_dir = runner.calls[0]
        assert command == ["go", "test", ".", "-json", f"-coverprofile={coverage_file}"]
        assert working_dir == tmp_path
        assert stdout == ["ok p1 coverage: 80.00% of statements\n"]
        assert not coverage_file.exists()

    async def test_stderr_forwarded(self, fake_runner, go_event, coverage_event, coverage_file) -> None:
        runner = fake_runner(stdout=[coverage_event("p1", 80.0)], stderr=["warning: something\n"])
        gate, _, stderr = make_gate(runner, RunConfig(), coverage_file)

        await gate.run()

        assert stderr == ["warning: something\n"]

    async def test_tmp_file_error(self, fake_runner) -> None:
        runner = fake_runner()
        gate, _, _ = make_gate(runner, RunConfig(), tmp_file_factory=MagicMock(side_effect=OSError("oops")))

        with pytest.raises(LaunchError, match="failed to create temporary file: oops"):
            await gate.run()
        assert runner.calls == []

    async def test_launch_error_propagates(self, fake_runner, coverage_file) -> None:
        runner = fake_runner(error=LaunchError("failed to execute shell command: bad news bears"))
        gate, _, _ = make_gate(runner, RunConfig(), coverage_file)

        with pytest.raises(LaunchError, match="bad news bears"):
            await gate.run()
        assert not coverage_file.exists()

    async def test_config_conflict_rejected_before_run(self, fake_runner, coverage_file) -> None:
        runner = fake_runner()
        gate, _, _ = make_gate(runner, RunConfig(min_coverage=10, func_filter=("Un",)), coverage_file)

        with pytest.raises(ConfigurationError):
            await gate.run()
        assert runner.calls == []

    async def test_func_filter_skips_coverage(self, fake_runner, go_event) -> None:
        factory = MagicMock()
        runner = fake_runner(stdout=[go_event("pass", "p1"), go_event("pass", "p2")])
        gate, _, _ = make_gate(runner, RunConfig(func_filter=("Un",)), tmp_file_factory=factory)

        verdict = await gate.run()

        assert verdict.passed
        factory.assert_not_called()
        command, _ = runner.calls[0]
        assert command[-2:] == ["-run", "(Un)"]

    async def test_fatal_stream_error_wins_over_exit_code(self, fake_runner, go_event, coverage_file) -> None:
        runner = fake_runner(stdout=[go_event("pass"), go_event("fail")], exit_code=1)
        gate, _, _ = make_gate(runner, RunConfig(), coverage_file)

        with pytest.raises(DuplicateResultError):
            await gate.run()

    async def test_classification_error(self, fake_runner, coverage_file) -> None:
        runner = fake_runner(stdout=["} bleh {\n"])
        gate, _, _ = make_gate(runner, RunConfig(), coverage_file)

        with pytest.raises(ClassificationError, match=r"failed to parse go event \(\} bleh \{\)"):
            await gate.run()

    async def test_unexplained_exit_code(self, fake_runner, coverage_file) -> None:
        runner = fake_runner(stderr=["go: cannot find main module\n"], exit_code=1)
        gate, _, _ = make_gate(runner, RunConfig(), coverage_file)

        with pytest.raises(RunnerExitError, match="exited with code 1: go: cannot find main module") as exc_info:
            await gate.run()
        assert exc_info.value.exit_code == 1

    async def test_exit_code_explained_by_failures(self, fake_runner, go_event, coverage_file) -> None:
        runner = fake_runner(stdout=[go_event("fail", "p1")], exit_code=1)
        gate, _, _ = make_gate(runner, RunConfig(), coverage_file)

        verdict = await gate.run()

        assert isinstance(verdict.error, TestFailureError)

    async def test_expected_packages(self, fake_runner, coverage_event, coverage_file) -> None:
        runner = fake_runner(stdout=[coverage_event("p1", 90.0)])
        gate, _, _ = make_gate(runner, RunConfig(expected_packages=2), coverage_file)

        with pytest.raises(PackageCountMismatchError, match=r"observed 1: \[p1\]"):
            await gate.run()

    async def test_text_mode(self, fake_runner, coverage_file) -> None:
        lines = [
            "ok  \tp1\t0.1s\tcoverage: 12.0% of statements\n",
            "FAIL\tp2\t0.1s\n",
            "FAIL\n",
        ]
        runner = fake_runner(stdout=lines, exit_code=1)
        gate, stdout, _ = make_gate(runner, RunConfig(output_format="text", min_coverage=10), coverage_file)

        verdict = await gate.run()

        assert stdout == lines
        assert [str(e) for e in verdict.errors] == ["Tests failed for package: p2"]
        command, _ = runner.calls[0]
        assert "-json" not in command


def test_create_coverage_file() -> None:
    path = create_coverage_file()
    try:
        assert path.exists()
        assert path.name.startswith("covgate")
    finally:
        path.unlink()
