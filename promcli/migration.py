"""Migration from the single-server configuration file.

Older releases stored one server directly at the top level of
``config.json``. On first load such a file is backed up, converted into a
store holding a single ``default`` profile, and written back in the new
layout. Once rewritten the file is no longer legacy, so this runs once.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigIOError
from .models import ConfigStore, Profile

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "default"
BACKUP_SUFFIX = ".backup"

CREDENTIAL_FIELDS = ("username", "password", "token")


def backup_path_for(path: Path) -> Path:
    """Get the backup file path for a configuration file."""
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def is_legacy(document: Any) -> bool:
    """Check whether a parsed document uses the single-server layout.

    A document carrying both ``serverUrl`` and ``profiles`` is treated as
    already migrated.
    """
    return isinstance(document, dict) and "serverUrl" in document and "profiles" not in document


def _legacy_credentials(document: Dict[str, Any]) -> Dict[str, Any]:
    """Collect credentials from a legacy document.

    Credentials are read from the top level, falling back to the nested
    ``auth`` object written by the old ``config set`` command.
    """
    credentials: Dict[str, Any] = {}

    nested = document.get("auth")
    if isinstance(nested, dict):
        for field in CREDENTIAL_FIELDS:
            if nested.get(field):
                credentials[field] = nested[field]

    for field in CREDENTIAL_FIELDS:
        if document.get(field):
            credentials[field] = document[field]

    return credentials


def migrate(document: Dict[str, Any]) -> ConfigStore:
    """Convert a legacy document into a store with one ``default`` profile.

    Values are copied as they are; the old file was valid under the old
    rules and is not validated again.
    """
    profile = Profile(server_url=document["serverUrl"], **_legacy_credentials(document))

    return ConfigStore(
        active_profile=DEFAULT_PROFILE_NAME,
        profiles={DEFAULT_PROFILE_NAME: profile},
    )


def backup(path: Path) -> Optional[Path]:
    """Copy the configuration file byte for byte to ``<path>.backup``.

    An existing backup is never overwritten, so the oldest copy of the
    legacy file is the one kept.

    Returns:
        The backup path, or None if a backup already existed

    Raises:
        ConfigIOError: If the copy fails
    """
    path = Path(path)
    backup_path = backup_path_for(path)

    if backup_path.exists():
        logger.warning("Backup %s already exists, keeping it", backup_path)
        return None

    try:
        shutil.copyfile(path, backup_path)
    except OSError as e:
        raise ConfigIOError(
            f"Failed to back up configuration to {backup_path}: {e}",
            path=backup_path,
            operation="backup",
        ) from e

    logger.info("Configuration backed up to %s", backup_path)
    return backup_path
