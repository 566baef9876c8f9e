#
# src/covgate/cli/__init__.py
#
"""
Command line interface for covgate.
"""
