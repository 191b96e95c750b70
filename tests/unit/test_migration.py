"""Unit tests for migration.py module.

Tests legacy format detection, conversion to the multi-profile store,
and the backup copy of the legacy file.
"""

from unittest.mock import patch

import pytest

from promcli.exceptions import ConfigIOError
from promcli.migration import (
    DEFAULT_PROFILE_NAME,
    backup,
    backup_path_for,
    is_legacy,
    migrate,
)
from promcli.models import ConfigStore, Profile


class TestIsLegacy:
    """Test cases for legacy format detection."""

    def test_flat_document_is_legacy(self):
        """Test the single-server layout."""
        assert is_legacy({
            "serverUrl": "https://prometheus.example.com",
            "username": "admin",
            "password": "secret",
        }) is True

    def test_new_document_is_not_legacy(self):
        """Test the multi-profile layout."""
        assert is_legacy({
            "activeProfile": "production",
            "profiles": {"production": {"serverUrl": "https://prod.example.com"}},
        }) is False

    def test_document_with_both_keys_is_not_legacy(self):
        """Test that a profiles key wins over a top-level serverUrl."""
        assert is_legacy({
            "serverUrl": "https://prometheus.example.com",
            "profiles": {"production": {"serverUrl": "https://prod.example.com"}},
        }) is False

    @pytest.mark.parametrize("document", [{}, [], None, "serverUrl", 42, ["serverUrl"]])
    def test_other_documents_are_not_legacy(self, document):
        """Test documents without a top-level serverUrl."""
        assert is_legacy(document) is False


class TestMigrate:
    """Test cases for converting legacy documents."""

    def test_migrate_url_only(self):
        """Test a legacy document without credentials."""
        store = migrate({"serverUrl": "https://prometheus.example.com"})

        assert store.active_profile == DEFAULT_PROFILE_NAME == "default"
        assert store.profiles["default"].to_document() == {
            "serverUrl": "https://prometheus.example.com"
        }

    def test_migrate_basic_auth(self):
        """Test that username and password are preserved."""
        store = migrate({
            "serverUrl": "https://prometheus.example.com",
            "username": "admin",
            "password": "secret",
        })

        assert store.profiles["default"].to_document() == {
            "serverUrl": "https://prometheus.example.com",
            "username": "admin",
            "password": "secret",
        }

    def test_migrate_bearer_token(self):
        """Test the token scenario from the legacy layout."""
        store = migrate({"serverUrl": "https://x.com", "token": "t1"})

        assert store == ConfigStore(
            active_profile="default",
            profiles={"default": Profile(server_url="https://x.com", token="t1")},
        )

    def test_migrate_does_not_revalidate(self):
        """Test that legacy values are copied even if current rules reject them."""
        store = migrate({
            "serverUrl": "https://x.com/?legacy=1",
            "username": "only-user",
        })

        profile = store.profiles["default"]
        assert profile.server_url == "https://x.com/?legacy=1"
        assert profile.username == "only-user"
        assert profile.password is None

    def test_migrate_nested_auth(self):
        """Test credentials stored under an auth object."""
        store = migrate({
            "serverUrl": "https://prometheus.example.com",
            "auth": {"type": "basic", "username": "admin", "password": "secret"},
            "timeout": 30000,
        })

        profile = store.profiles["default"]
        assert profile.username == "admin"
        assert profile.password == "secret"
        assert profile.to_document() == {
            "serverUrl": "https://prometheus.example.com",
            "username": "admin",
            "password": "secret",
        }

    def test_top_level_credentials_win_over_nested(self):
        """Test precedence when both layouts are present."""
        store = migrate({
            "serverUrl": "https://x.com",
            "token": "top",
            "auth": {"type": "bearer", "token": "nested"},
        })

        assert store.profiles["default"].token == "top"


class TestBackup:
    """Test cases for backing up the legacy file."""

    def test_backup_copies_bytes(self, tmp_path):
        """Test that the backup is byte-for-byte identical."""
        path = tmp_path / "config.json"
        content = b'{ "serverUrl":  "https://x.com",\n  "token": "t1" }\n'
        path.write_bytes(content)

        result = backup(path)

        assert result == tmp_path / "config.json.backup"
        assert result.read_bytes() == content
        assert path.read_bytes() == content

    def test_backup_keeps_existing_backup(self, tmp_path):
        """Test that an older backup is not overwritten."""
        path = tmp_path / "config.json"
        path.write_text('{"serverUrl": "https://new.example.com"}')
        backup_path = backup_path_for(path)
        backup_path.write_text('{"serverUrl": "https://old.example.com"}')

        result = backup(path)

        assert result is None
        assert backup_path.read_text() == '{"serverUrl": "https://old.example.com"}'

    def test_backup_failure_raises_io_error(self, tmp_path):
        """Test that copy failures are reported."""
        path = tmp_path / "config.json"
        path.write_text('{"serverUrl": "https://x.com"}')

        with patch("promcli.migration.shutil.copyfile", side_effect=OSError("read-only")):
            with pytest.raises(ConfigIOError, match="read-only") as exc_info:
                backup(path)

        assert exc_info.value.operation == "backup"
