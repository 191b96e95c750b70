"""Configuration management for the Prometheus CLI.

This module provides the profile repository: loading the configuration
store (migrating older single-server files on the way), and adding,
removing and switching between named Prometheus server profiles.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from . import migration
from .exceptions import (
    ConfigCorruptedError,
    DuplicateProfileError,
    ProfileNotFoundError,
)
from .models import ConfigStore, Profile
from .storage import read_document, save_store
from .validators import (
    normalize_server_url,
    validate_auth,
    validate_profile_name,
    validate_server_url,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "PROM_CLI_CONFIG_PATH"
DEFAULT_CONFIG_DIR = ".prom-cli"
CONFIG_FILE_NAME = "config.json"


def default_config_path() -> Path:
    """Get the per-user configuration file path."""
    return Path.home() / DEFAULT_CONFIG_DIR / CONFIG_FILE_NAME


def resolve_config_path(override: Optional[Union[str, Path]] = None) -> Path:
    """Resolve which configuration file to use.

    Precedence: explicit override, then the ``PROM_CLI_CONFIG_PATH``
    environment variable, then ``~/.prom-cli/config.json``.
    """
    if override:
        return Path(override).expanduser()

    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()

    return default_config_path()


class ConfigRepository:
    """Reads and writes the profile store kept in a single JSON file.

    The repository keeps no store of its own. Every mutating operation
    takes the current store, persists a new one and returns it.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize the repository.

        Args:
            config_path: Configuration file path. If None, it is resolved
                from the environment or the default location.
        """
        self.config_path = Path(config_path) if config_path else resolve_config_path()

    @property
    def backup_path(self) -> Path:
        """Path the legacy configuration is backed up to."""
        return migration.backup_path_for(self.config_path)

    def load(self) -> ConfigStore:
        """Load the configuration store from disk.

        A missing file yields an empty store without creating anything. A
        single-server file is migrated and rewritten before returning.

        Returns:
            The current store

        Raises:
            ConfigCorruptedError: If the file is not a valid store document
            ConfigIOError: If the file cannot be read, or migration cannot
                back up or rewrite it
        """
        if not self.config_path.exists():
            logger.debug("No configuration at %s, starting empty", self.config_path)
            return ConfigStore.empty()

        try:
            document = read_document(self.config_path)
        except ConfigCorruptedError as e:
            raise self._corrupted(e.message) from e

        if migration.is_legacy(document):
            return self._migrate(document)

        if not isinstance(document, dict) or not isinstance(document.get("profiles"), dict):
            raise self._corrupted(
                "Invalid configuration structure: missing or invalid 'profiles' field"
            )

        try:
            return ConfigStore.model_validate(document)
        except ValidationError as e:
            raise self._corrupted(f"Invalid configuration structure: {e}") from e

    def add(self, store: ConfigStore, name: str, profile: Profile) -> ConfigStore:
        """Add a new profile.

        The first profile added to an empty store becomes the active one.

        Args:
            store: Current store
            name: Profile name
            profile: Profile to add

        Returns:
            The updated store, already saved

        Raises:
            ProfileNameError: If the name is invalid
            DuplicateProfileError: If the name is taken
            ServerUrlError: If the server URL is invalid
            AuthConfigError: If the credentials are inconsistent
            ConfigIOError: If saving fails
        """
        validate_profile_name(name)

        if name in store.profiles:
            raise DuplicateProfileError(name)

        server_url = normalize_server_url(profile.server_url)
        validate_server_url(server_url)
        validate_auth(profile)

        if server_url != profile.server_url:
            profile = profile.model_copy(update={"server_url": server_url})

        profiles: Dict[str, Profile] = dict(store.profiles)
        profiles[name] = profile

        active = store.active_profile
        if not store.profiles:
            active = name
            logger.info("Profile '%s' is the first profile and is now active", name)

        new_store = store.with_profiles(profiles, active)
        self.save(new_store)
        return new_store

    def remove(self, store: ConfigStore, name: str) -> ConfigStore:
        """Remove a profile.

        Removing the active profile leaves no profile active.

        Raises:
            ProfileNotFoundError: If the profile doesn't exist
            ConfigIOError: If saving fails
        """
        self._require(store, name)

        profiles = {key: value for key, value in store.profiles.items() if key != name}

        active = store.active_profile
        if active == name:
            active = None
            logger.info("Removed the active profile '%s'; no profile is active", name)

        new_store = store.with_profiles(profiles, active)
        self.save(new_store)
        return new_store

    def set_active(self, store: ConfigStore, name: str) -> ConfigStore:
        """Make a profile the active one.

        Raises:
            ProfileNotFoundError: If the profile doesn't exist
            ConfigIOError: If saving fails
        """
        self._require(store, name)

        new_store = store.with_profiles(dict(store.profiles), name)
        self.save(new_store)
        return new_store

    def get_active(self, store: ConfigStore) -> Optional[Profile]:
        """Get the active profile, or None if none is set or it is missing."""
        if not store.active_profile:
            return None
        return store.profiles.get(store.active_profile)

    def get_profile(self, store: ConfigStore, name: str) -> Profile:
        """Get a specific profile by name.

        Raises:
            ProfileNotFoundError: If the profile doesn't exist
        """
        self._require(store, name)
        return store.profiles[name]

    def list_names(self, store: ConfigStore) -> List[str]:
        """List profile names in alphabetical order."""
        return sorted(store.profiles)

    def save(self, store: ConfigStore) -> None:
        """Persist a store to the repository's configuration file."""
        save_store(store, self.config_path)

    def _migrate(self, document: Dict) -> ConfigStore:
        logger.warning("Migrating %s to the multi-profile format", self.config_path)

        try:
            store = migration.migrate(document)
        except ValidationError as e:
            raise self._corrupted(f"Cannot migrate legacy configuration: {e}") from e

        migration.backup(self.config_path)
        self.save(store)

        logger.warning(
            "Migration complete; created profile '%s' (backup: %s)",
            migration.DEFAULT_PROFILE_NAME,
            self.backup_path,
        )
        return store

    def _require(self, store: ConfigStore, name: str) -> None:
        if name not in store.profiles:
            raise ProfileNotFoundError(name, available=self.list_names(store))

    def _corrupted(self, message: str) -> ConfigCorruptedError:
        backup_path = self.backup_path if self.backup_path.exists() else None
        return ConfigCorruptedError(message, path=self.config_path, backup_path=backup_path)
