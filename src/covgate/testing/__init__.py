#
# src/covgate/testing/__init__.py
#
"""
Test execution sub-package for covgate.
"""
from .command import build_test_command
from .gate import CoverageGate, create_coverage_file
from .protocols import TestRunner, TestRunResult
from .subprocess_runner import SubprocessTestRunner

__all__ = [
    "CoverageGate",
    "SubprocessTestRunner",
    "TestRunResult",
    "TestRunner",
    "build_test_command",
    "create_coverage_file",
]

# 🔼⚙️
