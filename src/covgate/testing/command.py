#
# src/covgate/testing/command.py
#
"""
Builds the `go test` invocation for a run configuration.
"""
from pathlib import Path

from covgate.config import RunConfig


def build_test_command(config: RunConfig, coverprofile: Path | None = None) -> list[str]:
    """
    Returns the full command line, binary first.

    A coverage profile is only passed when no function filter is set; the two
    are mutually exclusive (see RunConfig.validate).
    """
    args = [config.go_binary, "test"]
    if config.timeout is not None:
        args += ["-timeout", f"{config.timeout}s"]
    args += list(config.paths)
    if config.output_format == "json":
        args.append("-json")
    if config.verbose:
        args.append("-v")
    if config.func_filter:
        args += ["-run", f"({'|'.join(config.func_filter)})"]
    elif coverprofile is not None:
        args.append(f"-coverprofile={coverprofile}")
    return args

# 🔼⚙️
