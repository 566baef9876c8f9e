#
# src/covgate/__init__.py
#
"""
Covgate: run Go tests and gate on per-package results and statement coverage.
"""
from covgate.exceptions import CovgateError
from covgate.runtime import ResultAggregator, Verdict
from covgate.state import Outcome, PackageRecord

__all__ = [
    "CovgateError",
    "Outcome",
    "PackageRecord",
    "ResultAggregator",
    "Verdict",
]

# 🔼⚙️
