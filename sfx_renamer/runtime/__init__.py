"""
Runtime Module

Process-level setup for the command-line entry point.

Usage:
    from sfx_renamer.runtime import setup_logging
    setup_logging("DEBUG", log_file="~/.sfx_renamer/sfx_renamer.log")
"""

from .bootstrap import setup_logging

__all__ = ["setup_logging"]
