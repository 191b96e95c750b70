"""Error presentation helpers for the Prometheus CLI.

This module maps exceptions to user-facing messages and process exit
codes. Configuration errors are dispatched on their ``ErrorKind``.
"""

from typing import List

from ..exceptions import (
    ConfigError,
    ErrorKind,
    PromCliError,
    ServerConnectionError,
)

EXIT_CODES = {
    ErrorKind.NAME: 2,
    ErrorKind.URL: 2,
    ErrorKind.AUTH: 2,
    ErrorKind.DUPLICATE: 1,
    ErrorKind.NOT_FOUND: 1,
    ErrorKind.CORRUPTION: 3,
    ErrorKind.IO: 4,
}


def exit_code_for(error: Exception) -> int:
    """Get the process exit code for an error."""
    if isinstance(error, ConfigError):
        return EXIT_CODES[error.kind]
    return 1


def _hints(error: ConfigError) -> List[str]:
    """Follow-up suggestions for a configuration error."""
    kind = error.kind

    if kind in (ErrorKind.NAME, ErrorKind.URL, ErrorKind.AUTH):
        return []

    if kind == ErrorKind.DUPLICATE:
        return [
            "Choose another name, or remove the existing profile first:",
            f"  prom config remove {error.details.get('name')}",
        ]

    if kind == ErrorKind.NOT_FOUND:
        available = error.details.get("available")
        if available:
            return [f"Available profiles: {', '.join(available)}"]
        return ["No profiles configured. Add one with:", "  prom config add <name> <url>"]

    if kind == ErrorKind.CORRUPTION:
        if error.details.get("backup_path"):
            return [f"A backup of your previous configuration exists at: {error.details['backup_path']}"]
        return [f"Fix or delete the configuration file: {error.details.get('path')}"]

    if kind == ErrorKind.IO:
        path = error.details.get("path")
        return [f"Check permissions and free space for: {path}"] if path else []

    raise ValueError(f"Unhandled error kind: {kind}")


def format_error_for_user(error: Exception, debug: bool = False) -> str:
    """Format an error message for user display.

    Args:
        error: The exception to format
        debug: Whether to include debug information

    Returns:
        Formatted error message
    """
    if isinstance(error, ConfigError):
        lines = [f"Error: {error.message}"]
        lines.extend(_hints(error))
        if debug:
            lines.append(f"Kind: {error.kind.value}")
        return "\n".join(lines)

    if isinstance(error, ServerConnectionError):
        message = f"Connection error: {error.message}"
        if error.status_code and debug:
            message += f"\nStatus code: {error.status_code}"
        return message

    if isinstance(error, PromCliError):
        message = f"Error: {error.message}"
    else:
        message = f"Error: {error}"

    if debug:
        message += f"\nType: {type(error).__name__}"
    return message
