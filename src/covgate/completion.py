#
# src/covgate/completion.py
#
"""
Discovers Go test function names for shell completion of --func-filter.
"""
import os
import re
from collections.abc import Iterable
from pathlib import Path

import click
import structlog
from click.shell_completion import CompletionItem

from covgate.telemetry import StructLogger

log: StructLogger = structlog.get_logger("completion")

FIND_TEST_PATTERN = re.compile(r"^func\s+Test([a-zA-Z0-9_]*)\b.*\*testing\.[A-Z]\b")
TEST_FILE_SUFFIX = "_test.go"
RECURSIVE_PATH = "./..."


def _test_files(root: str) -> Iterable[Path]:
    """Yields *_test.go files in root, descending into sub-directories only for './...'."""
    recursive = root == RECURSIVE_PATH
    base = Path("." if recursive else root)
    if not base.is_dir():
        return
    if not recursive:
        yield from sorted(p for p in base.iterdir() if p.is_file() and p.name.endswith(TEST_FILE_SUFFIX))
        return
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(TEST_FILE_SUFFIX):
                yield Path(dirpath) / name


def find_test_functions(paths: Iterable[str]) -> list[str]:
    """Returns the distinct, sorted names (without the 'Test' prefix) of test functions under paths."""
    names: set[str] = set()
    for root in paths:
        for path in _test_files(root):
            try:
                with path.open(encoding="utf-8", errors="replace") as f:
                    for line in f:
                        if m := FIND_TEST_PATTERN.match(line):
                            names.add(m.group(1))
            except OSError as e:
                log.warning("Failed to open test file", path=str(path), error=str(e))
    return sorted(names)


def complete_func_filter(ctx: click.Context, param: click.Parameter, incomplete: str) -> list[CompletionItem]:
    """click shell_complete callback for --func-filter."""
    paths = ctx.params.get("paths") or (".",)
    already = {name for name in (ctx.params.get("func_filter") or ())}
    prefix = incomplete.lower()
    return [
        CompletionItem(name)
        for name in find_test_functions(paths)
        if name.lower().startswith(prefix) and name not in already
    ]

# 🔼⚙️
