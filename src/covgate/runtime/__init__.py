#
# src/covgate/runtime/__init__.py
#
"""
Classification and aggregation of test runner output.
"""
from .aggregator import ResultAggregator, Verdict
from .classifier import JsonEventClassifier, LineClassifier, get_classifier

__all__ = [
    "JsonEventClassifier",
    "LineClassifier",
    "ResultAggregator",
    "Verdict",
    "get_classifier",
]

# 🔼⚙️
