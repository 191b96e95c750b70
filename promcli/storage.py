"""On-disk persistence for the configuration store.

Writes go to a temporary sibling file which is then renamed onto the real
path, so the configuration file is never observed half written. The
rename is the only durability boundary.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .exceptions import ConfigCorruptedError, ConfigIOError
from .models import ConfigStore

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def temp_path_for(path: Path) -> Path:
    """Get the temporary file used while writing ``path``."""
    return path.with_name(path.name + TEMP_SUFFIX)


def serialize_store(store: ConfigStore) -> str:
    """Serialize a store to its JSON document text."""
    return json.dumps(store.to_document(), indent=2, ensure_ascii=False) + "\n"


def save_store(store: ConfigStore, path: Path) -> None:
    """Atomically replace the configuration file with ``store``.

    Only the parent directory is created when missing; a missing
    grandparent is reported as an error.

    Args:
        store: Store to persist
        path: Configuration file path

    Raises:
        ConfigIOError: If the directory, temp file or rename step fails
    """
    path = Path(path)
    temp_path = temp_path_for(path)
    content = serialize_store(store)

    try:
        path.parent.mkdir(exist_ok=True)
    except OSError as e:
        raise ConfigIOError(
            f"Failed to create configuration directory {path.parent}: {e}",
            path=path,
            operation="mkdir",
        ) from e

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise ConfigIOError(
            f"Failed to save configuration to {path}: {e}",
            path=path,
            operation="write",
        ) from e

    logger.debug("Saved configuration with %d profile(s) to %s", len(store.profiles), path)


def read_document(path: Path) -> Any:
    """Read and parse the raw JSON document at ``path``.

    Raises:
        ConfigCorruptedError: If the file is not valid JSON
        ConfigIOError: If the file cannot be read
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(
            f"Failed to read configuration from {path}: {e}",
            path=path,
            operation="read",
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigCorruptedError(
            f"Configuration file is corrupted (not UTF-8 text): {e}",
            path=path,
        ) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigCorruptedError(
            f"Configuration file is corrupted (invalid JSON): {e.msg} at line {e.lineno}",
            path=path,
        ) from e
