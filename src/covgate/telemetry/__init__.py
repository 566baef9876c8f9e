#
# src/covgate/telemetry/__init__.py
#
"""
Logging setup for covgate.
"""
from .logger import StructLogger, setup_logging

__all__ = ["StructLogger", "setup_logging"]

# 🔼⚙️
