# src/covgate/cli/tests_cmds.py

import click
import structlog

from covgate.completion import find_test_functions
from covgate.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.tests")


@click.command(name="tests")
@click.argument("paths", nargs=-1)
def tests_cli(paths: tuple[str, ...]):
    """List test function names usable with 'run --func-filter'.

    Use './...' to include sub-directories.
    """
    names = find_test_functions(paths or (".",))
    log.debug("Discovered test functions", count=len(names))
    for name in names:
        click.echo(name)

# 🔼⚙️
