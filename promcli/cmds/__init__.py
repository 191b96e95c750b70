"""Command modules for the Prometheus CLI.

This module exports all command groups (Typer apps) that can be registered
with the main application.
"""

from .config import app as config_app

__all__ = [
    "config_app",
]
