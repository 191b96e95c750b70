"""Exception classes for the Prometheus CLI.

This module defines custom exception classes used throughout the application
for proper error handling and user feedback. Configuration errors carry an
``ErrorKind`` tag so the command layer can handle every kind explicitly.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, List


class ErrorKind(str, Enum):
    """Closed set of configuration error kinds."""

    NAME = "name"
    URL = "url"
    AUTH = "auth"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    CORRUPTION = "corruption"
    IO = "io"


class PromCliError(Exception):
    """Base exception class for all Prometheus CLI errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(PromCliError):
    """Exception raised for configuration-related errors."""

    kind: ErrorKind


class ProfileNameError(ConfigError):
    """Exception raised when a profile name breaks the naming rules."""

    kind = ErrorKind.NAME

    def __init__(self, message: str, name: Optional[str] = None) -> None:
        super().__init__(message, {"name": name})
        self.name = name


class ServerUrlError(ConfigError):
    """Exception raised when a server URL is rejected."""

    kind = ErrorKind.URL

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message, {"url": url})
        self.url = url


class AuthConfigError(ConfigError):
    """Exception raised for invalid credential combinations."""

    kind = ErrorKind.AUTH


class DuplicateProfileError(ConfigError):
    """Exception raised when adding a profile whose name is taken."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, name: str) -> None:
        super().__init__(f"Profile '{name}' already exists", {"name": name})
        self.name = name


class ProfileNotFoundError(ConfigError):
    """Exception raised when a profile name is unknown."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, name: str, available: Optional[List[str]] = None) -> None:
        """Initialize the exception.

        Args:
            name: Requested profile name
            available: Sorted names of the profiles that do exist
        """
        super().__init__(
            f"Profile '{name}' not found",
            {"name": name, "available": available or []},
        )
        self.name = name
        self.available = available or []


class ConfigCorruptedError(ConfigError):
    """Exception raised when the configuration file cannot be understood."""

    kind = ErrorKind.CORRUPTION

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        backup_path: Optional[Path] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            path: Configuration file that failed to load
            backup_path: Existing backup file the user can restore from
        """
        super().__init__(
            message,
            {
                "path": str(path) if path else None,
                "backup_path": str(backup_path) if backup_path else None,
            },
        )
        self.path = path
        self.backup_path = backup_path


class ConfigIOError(ConfigError):
    """Exception raised for filesystem failures while reading or writing."""

    kind = ErrorKind.IO

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message, {"path": str(path) if path else None, "operation": operation})
        self.path = path
        self.operation = operation


class ServerConnectionError(PromCliError):
    """Exception raised when the Prometheus server cannot be reached."""

    def __init__(
        self,
        message: str,
        server_url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, {"server_url": server_url, "status_code": status_code})
        self.server_url = server_url
        self.status_code = status_code
