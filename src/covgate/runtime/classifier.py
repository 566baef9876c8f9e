#
# src/covgate/runtime/classifier.py
#
"""
Classifiers that turn one unit of `go test` output into observations.

Two output formats are understood:

* structured: one JSON event per line, as produced by ``go test -json``.
* text: the plain line-oriented output of ``go test``.

The patterns below are the conformance surface against the runner's textual
output; if the runner changes its wording these need to follow.
"""

import json
import re
from typing import Any, Protocol

import structlog

from covgate.events import (
    CoverageReport,
    Ignored,
    NoTestFiles,
    Observation,
    PackageOutcome,
    Passthrough,
    Result,
    Unrecognized,
)
from covgate.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.classifier")

COVERAGE_PATTERN = re.compile(r"^ok\s+([^\s]+)\s.*coverage: +([0-9]+\.[0-9]+)% of statements\n?$")
NO_TEST_FILES_PATTERN = re.compile(r"^\?.*\[no test files\]\n?$")
# Text mode needs the package name out of the marker line itself.
NO_TEST_FILES_LINE_PATTERN = re.compile(r"^\?\s+([^\s]+)\s.*\[no test files\]\n?$")
FAIL_LINE_PATTERN = re.compile(r"^FAIL\s+([^\s]+)")

SUCCESS_ACTIONS = frozenset({"pass", "success"})
FAILURE_ACTIONS = frozenset({"fail", "failure"})
# Package actions that carry no outcome.
IGNORED_ACTIONS = frozenset({"skip", "start"})


class Classifier(Protocol):
    """Maps one unit of runner output to zero or more observations."""

    def classify(self, unit: str) -> tuple[Observation, ...]:
        ...


def _field(event: dict[str, Any], name: str) -> Any:
    """Looks up an event field the way Go's decoder does: exact key first, then case-insensitively."""
    if name in event:
        return event[name]
    lowered = name.lower()
    for key, value in event.items():
        if key.lower() == lowered:
            return value
    return None


class JsonEventClassifier:
    """Classifies the newline-delimited JSON events of ``go test -json``."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def classify(self, unit: str) -> tuple[Observation, ...]:
        line = unit.strip()
        if not line:
            return ()

        try:
            event = json.loads(line)
        except json.JSONDecodeError as e:
            return (Unrecognized(line, f"failed to parse go event ({line}): {e}"),)
        if not isinstance(event, dict):
            return (Unrecognized(line, f"failed to parse go event ({line}): not a JSON object"),)

        fields = {name: _field(event, name) for name in ("Package", "Test", "Action", "Output")}
        bad = [name for name, value in fields.items() if value is not None and not isinstance(value, str)]
        if bad:
            return (Unrecognized(line, f"failed to parse go event ({line}): field {bad[0]} is not a string"),)

        package = fields["Package"] or ""
        action = fields["Action"] or ""
        output = fields["Output"] or ""

        if fields["Test"]:
            # Test case events are only shown in verbose mode.
            if self.verbose and action == "output":
                return (Passthrough(output, package),)
            return (Ignored(line),)

        if action in SUCCESS_ACTIONS:
            return (PackageOutcome(package, Result.SUCCESS, line),)
        if action in FAILURE_ACTIONS:
            return (PackageOutcome(package, Result.FAILURE, line),)
        if action in IGNORED_ACTIONS:
            return (Ignored(line),)
        if action == "output":
            return self._classify_output(package, output)

        log.debug("Unknown package event action", package=package, action=action)
        return (Unrecognized(line, f'Unknown package event action: "{action}"', package),)

    def _classify_output(self, package: str, output: str) -> tuple[Observation, ...]:
        shown = Passthrough(output, package)
        if NO_TEST_FILES_PATTERN.match(output):
            return (shown, NoTestFiles(package, output.strip()))
        if m := COVERAGE_PATTERN.match(output):
            return (shown, CoverageReport(package, float(m.group(2)), output.strip()))
        return (shown,)


class LineClassifier:
    """
    Classifies the plain text output of ``go test``, one line at a time.

    Anything that matches none of the known patterns is shown unchanged;
    build banners and warnings are expected here and are not errors.
    """

    def classify(self, unit: str) -> tuple[Observation, ...]:
        shown = Passthrough(unit)
        line = unit.rstrip("\r\n")

        if m := NO_TEST_FILES_LINE_PATTERN.match(line):
            return (shown, NoTestFiles(m.group(1), line.strip()))
        if m := COVERAGE_PATTERN.match(line):
            return (shown, CoverageReport(m.group(1), float(m.group(2)), line.strip()))
        if m := FAIL_LINE_PATTERN.match(line):
            return (shown, PackageOutcome(m.group(1), Result.FAILURE, line.strip()))
        return (shown,)


def get_classifier(output_format: str, verbose: bool = False) -> Classifier:
    """Returns the classifier matching how the runner was invoked."""
    if output_format == "json":
        return JsonEventClassifier(verbose=verbose)
    if output_format == "text":
        return LineClassifier()
    raise ValueError(f"Unsupported output format: '{output_format}'")


# 🔼⚙️
