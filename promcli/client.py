"""HTTP session construction for Prometheus server profiles.

This module turns a connection profile into an authenticated
``requests.Session`` and offers a health check against the server.
"""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import ServerConnectionError
from .models import Profile

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
HEALTH_ENDPOINT = "/-/healthy"
USER_AGENT = "prom-cli"


def build_session(profile: Profile) -> requests.Session:
    """Create a requests session authenticated for ``profile``.

    Basic auth is set on the session; bearer tokens go into the
    ``Authorization`` header. Profiles without credentials get a plain
    session.
    """
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT

    if profile.auth_type == "bearer":
        session.headers["Authorization"] = f"Bearer {profile.token}"
    elif profile.auth_type == "basic":
        session.auth = (profile.username, profile.password)

    retry_strategy = Retry(
        total=0,
        connect=2,
        read=2,
        backoff_factor=0.5,
        status_forcelist=[502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


def check_server_health(
    profile: Profile,
    timeout: int = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> None:
    """Check that the profile's server answers its health endpoint.

    Args:
        profile: Profile to check
        timeout: Request timeout in seconds
        session: Session to use instead of building one

    Raises:
        ServerConnectionError: If the server is unreachable, rejects the
            credentials or reports itself unhealthy
    """
    session = session or build_session(profile)
    url = f"{profile.server_url}{HEALTH_ENDPOINT}"

    logger.debug("Checking server health at %s", url)
    try:
        response = session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise ServerConnectionError(
            f"Failed to connect to Prometheus at {profile.server_url}: {e}",
            server_url=profile.server_url,
        ) from e

    if response.status_code == 401:
        raise ServerConnectionError(
            "Authentication failed (401 Unauthorized). Check the profile credentials.",
            server_url=profile.server_url,
            status_code=401,
        )

    if response.status_code != 200:
        raise ServerConnectionError(
            f"Prometheus at {profile.server_url} is not healthy: HTTP {response.status_code}",
            server_url=profile.server_url,
            status_code=response.status_code,
        )
