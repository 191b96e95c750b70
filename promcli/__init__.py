"""Prometheus CLI package.

A command-line tool for querying Prometheus servers. Server connections
are kept as named profiles in a single configuration file, with one
profile active at a time.
"""

__version__ = "0.2.0"
__description__ = "Command-line tool for querying Prometheus servers"

# Re-export main classes for convenience
from .config import ConfigRepository, resolve_config_path
from .models import ConfigStore, Profile
from .render import OutputFormatter
from .exceptions import (
    PromCliError,
    ErrorKind,
    ConfigError,
    ProfileNameError,
    ServerUrlError,
    AuthConfigError,
    DuplicateProfileError,
    ProfileNotFoundError,
    ConfigCorruptedError,
    ConfigIOError,
    ServerConnectionError,
)

__all__ = [
    "__version__",
    "__description__",
    "ConfigRepository",
    "resolve_config_path",
    "ConfigStore",
    "Profile",
    "OutputFormatter",
    "PromCliError",
    "ErrorKind",
    "ConfigError",
    "ProfileNameError",
    "ServerUrlError",
    "AuthConfigError",
    "DuplicateProfileError",
    "ProfileNotFoundError",
    "ConfigCorruptedError",
    "ConfigIOError",
    "ServerConnectionError",
]
