# src/covgate/cli/main.py

"""
Main CLI entry point for covgate using Click.
Handles global options like logging level.
"""

from importlib.metadata import PackageNotFoundError, version

import click

from covgate.cli.run_cmds import run_cli
from covgate.cli.tests_cmds import tests_cli
from covgate.cli.utils import logging_options, setup_logging_from_context

try:
    __version__ = version("covgate")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="covgate")
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    Covgate: pass/fail and coverage gate for Go test runs.

    Runs `go test` over the given packages, streams its output and fails when
    any package fails or misses the required statement coverage.
    """
    ctx.ensure_object(dict)

    ctx.obj["LOG_LEVEL"] = log_level
    ctx.obj["LOG_FILE"] = log_file
    ctx.obj["JSON_LOGS"] = json_logs if json_logs is not None else False

    setup_logging_from_context(ctx)


cli.add_command(run_cli)
cli.add_command(tests_cli)

# 🖥️⚙️
