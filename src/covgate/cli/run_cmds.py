# src/covgate/cli/run_cmds.py

import asyncio

import click
import structlog
from rich.console import Console
from rich.table import Table

from covgate.cli.utils import logging_options, setup_logging_from_context
from covgate.completion import complete_func_filter
from covgate.config import OUTPUT_FORMATS, RunConfig
from covgate.exceptions import CovgateError
from covgate.runtime import Verdict
from covgate.telemetry import StructLogger
from covgate.testing import CoverageGate, SubprocessTestRunner

log: StructLogger = structlog.get_logger("cli.run")


def _run_gate(gate: CoverageGate) -> Verdict:
    """Runs the gate to completion on a fresh event loop."""
    return asyncio.run(gate.run())


def _render_summary(verdict: Verdict) -> None:
    failing = {error.package: str(error) for error in verdict.errors}
    table = Table(title="Package verdicts")
    table.add_column("Package")
    table.add_column("Outcome")
    table.add_column("Coverage", justify="right")
    table.add_column("Verdict")
    for name in sorted(verdict.packages):
        record = verdict.packages[name]
        status = f"[red]{failing[name]}[/red]" if name in failing else "[green]ok[/green]"
        table.add_row(name, record.outcome.name.lower(), record.display_coverage, status)
    Console(stderr=True).print(table)


@click.command(name="run")
@click.argument("paths", nargs=-1)
@click.option(
    "-m",
    "--min-coverage",
    type=click.FloatRange(0, 100),
    default=0.0,
    envvar="COVGATE_MIN_COVERAGE",
    show_envvar=True,
    help="If set, enforces that every tested package meets this statement coverage.",
)
@click.option("-v", "--verbose", is_flag=True, help="Whether or not to test with verbose output.")
@click.option(
    "-t",
    "--timeout",
    type=click.IntRange(min=1),
    default=None,
    envvar="COVGATE_TIMEOUT",
    show_envvar=True,
    help="Test timeout in seconds.",
)
@click.option(
    "-f",
    "--func-filter",
    multiple=True,
    shell_complete=complete_func_filter,
    help="The test function filter (repeatable). Disables coverage checks.",
)
@click.option(
    "-n",
    "--expect-packages",
    "expected_packages",
    type=click.IntRange(min=1),
    default=None,
    help="Fail unless exactly this many packages report results.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="Output format requested from the test runner.",
)
@click.option(
    "--go",
    "go_binary",
    default="go",
    show_default=True,
    envvar="COVGATE_GO",
    show_envvar=True,
    help="The go binary to invoke.",
)
@click.option("--summary", is_flag=True, help="Print a per-package verdict table to stderr.")
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    paths: tuple[str, ...],
    min_coverage: float,
    verbose: bool,
    timeout: int | None,
    func_filter: tuple[str, ...],
    expected_packages: int | None,
    output_format: str,
    go_binary: str,
    summary: bool,
    **kwargs,
):
    """Run go tests for PATHS (default '.') and check results and coverage."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

    try:
        config = RunConfig(
            paths=paths or (".",),
            verbose=verbose,
            min_coverage=min_coverage,
            timeout=timeout,
            func_filter=func_filter,
            expected_packages=expected_packages,
            output_format=output_format,
            go_binary=go_binary,
        )
        config.validate()
    except (CovgateError, ValueError) as e:
        log.error("Invalid run configuration", error=str(e))
        click.echo(str(e), err=True)
        ctx.exit(1)

    log.info("Initializing test run...", paths=list(config.paths))
    gate = CoverageGate(SubprocessTestRunner(), config)

    try:
        verdict = _run_gate(gate)
    except CovgateError as e:
        log.error("Test run aborted", error=str(e), error_type=type(e).__name__)
        click.echo(str(e), err=True)
        ctx.exit(1)

    for error in verdict.errors:
        click.echo(str(error), err=True)
    if summary:
        _render_summary(verdict)

    log.info("'run' command finished.", passed=verdict.passed)
    if verdict.error is not None:
        ctx.exit(1)

# 🔼⚙️
