#
# config/__init__.py
#
"""
Configuration handling sub-package for covgate.
"""

from .models import OUTPUT_FORMATS, GlobalConfig, RunConfig

__all__ = [
    "OUTPUT_FORMATS",
    "GlobalConfig",
    "RunConfig",
]

# 🔼⚙️
