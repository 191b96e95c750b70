"""Validation rules for profile names, server URLs and credentials.

Every function here is pure: it either returns normally or raises the
matching ``ConfigError`` subclass describing the violated rule.
"""

import re
from urllib.parse import urlsplit

from .exceptions import AuthConfigError, ProfileNameError, ServerUrlError
from .models import Profile

MAX_NAME_LENGTH = 64

NAME_PATTERN = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9_-]*[A-Za-z0-9])?$")
CONSECUTIVE_SPECIALS = re.compile(r"[-_]{2}")

ALLOWED_SCHEMES = ("http", "https")


def validate_profile_name(name: str) -> None:
    """Validate a profile name.

    Rules:
        - 1-64 characters long
        - Only letters, numbers, hyphens and underscores
        - Starts and ends with a letter or number
        - No two special characters in a row

    Raises:
        ProfileNameError: If any rule is broken
    """
    if not name:
        raise ProfileNameError("Profile name cannot be empty", name=name)

    if len(name) > MAX_NAME_LENGTH:
        raise ProfileNameError(
            f"Profile name must be at most {MAX_NAME_LENGTH} characters (got {len(name)})",
            name=name,
        )

    if not NAME_PATTERN.fullmatch(name):
        raise ProfileNameError(
            "Profile name must contain only letters, numbers, hyphens and underscores, "
            "and must start and end with a letter or number",
            name=name,
        )

    if CONSECUTIVE_SPECIALS.search(name):
        raise ProfileNameError(
            "Profile name cannot contain consecutive special characters",
            name=name,
        )


def normalize_server_url(url: str) -> str:
    """Remove trailing slashes from a server URL."""
    return url.rstrip("/")


def validate_server_url(url: str) -> None:
    """Validate a Prometheus server URL.

    Raises:
        ServerUrlError: If the URL is not absolute http(s) with a host, or
            carries a query string or fragment
    """
    try:
        parsed = urlsplit(url)
        # Accessing the port parses it and rejects values like ":abc"
        parsed.port
    except ValueError:
        raise ServerUrlError(f"Invalid URL format: {url}", url=url)

    if not parsed.scheme:
        raise ServerUrlError(f"Invalid URL format: {url}", url=url)

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ServerUrlError(
            f"URL must use http:// or https:// (got '{parsed.scheme}')", url=url
        )

    if not parsed.hostname:
        raise ServerUrlError(f"URL must include a hostname: {url}", url=url)

    if parsed.query or parsed.fragment or "?" in url or "#" in url:
        raise ServerUrlError("URL cannot contain query parameters or fragments", url=url)


def validate_auth(profile: Profile) -> None:
    """Validate the credential combination of a profile.

    Raises:
        AuthConfigError: If basic auth and a token are mixed, or only half
            of the basic auth pair is given
    """
    has_basic = bool(profile.username or profile.password)

    if has_basic and profile.token:
        raise AuthConfigError("Cannot use both username/password and token authentication")

    if profile.username and not profile.password:
        raise AuthConfigError("Password required when username is provided")

    if profile.password and not profile.username:
        raise AuthConfigError("Username required when password is provided")


def validate_profile(name: str, profile: Profile) -> None:
    """Run every rule against a named profile."""
    validate_profile_name(name)
    validate_server_url(profile.server_url)
    validate_auth(profile)
