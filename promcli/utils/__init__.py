"""Utility modules for the Prometheus CLI.

This package contains helpers for error presentation and logging setup.
"""

from .exceptions import exit_code_for, format_error_for_user
from .logging import setup_logging

__all__ = [
    "exit_code_for",
    "format_error_for_user",
    "setup_logging",
]
