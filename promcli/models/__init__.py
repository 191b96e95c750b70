"""Data models for the Prometheus CLI.

This package contains the Pydantic models describing connection profiles
and the persisted configuration store.
"""

from .profile import AuthType, ConfigStore, Profile

__all__ = [
    "AuthType",
    "ConfigStore",
    "Profile",
]
