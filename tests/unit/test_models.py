"""Unit tests for the Pydantic models.

Tests Profile and ConfigStore construction, aliases, immutability and
document conversion.
"""

import pytest
from pydantic import ValidationError

from promcli.models import ConfigStore, Profile


class TestProfile:
    """Test cases for the Profile model."""

    def test_profile_creation_by_field_name(self):
        """Test creating a profile with Python field names."""
        profile = Profile(server_url="https://prod.example.com", username="admin", password="secret")

        assert profile.server_url == "https://prod.example.com"
        assert profile.username == "admin"
        assert profile.password == "secret"
        assert profile.token is None

    def test_profile_creation_by_alias(self):
        """Test creating a profile from its on-disk form."""
        profile = Profile.model_validate({"serverUrl": "https://x.com", "token": "t1"})

        assert profile.server_url == "https://x.com"
        assert profile.token == "t1"

    def test_profile_requires_server_url(self):
        """Test that the server URL is mandatory."""
        with pytest.raises(ValidationError):
            Profile.model_validate({"username": "admin"})

    def test_profile_is_immutable(self):
        """Test that profiles cannot be modified after creation."""
        profile = Profile(server_url="https://x.com")

        with pytest.raises(ValidationError):
            profile.server_url = "https://y.com"

    def test_blank_credentials_are_absent(self):
        """Test that empty strings are stored as missing credentials."""
        profile = Profile(server_url="https://x.com", username="", password="", token="")

        assert profile.username is None
        assert profile.password is None
        assert profile.token is None
        assert profile.auth_type == "none"

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({}, "none"),
            ({"username": "a", "password": "b"}, "basic"),
            ({"token": "t"}, "bearer"),
            ({"username": "a"}, "none"),
        ],
    )
    def test_auth_type(self, kwargs, expected):
        """Test the derived authentication mode."""
        assert Profile(server_url="https://x.com", **kwargs).auth_type == expected

    def test_to_document_uses_aliases_and_skips_missing(self):
        """Test the on-disk dictionary form."""
        profile = Profile(server_url="https://staging.example.com", token="abc123")

        assert profile.to_document() == {"serverUrl": "https://staging.example.com", "token": "abc123"}

    def test_unknown_fields_are_kept(self):
        """Test that extra keys survive a load and dump."""
        profile = Profile.model_validate({"serverUrl": "https://x.com", "timeout": 5000})

        assert profile.to_document() == {"serverUrl": "https://x.com", "timeout": 5000}


class TestConfigStore:
    """Test cases for the ConfigStore model."""

    def test_empty_store(self):
        """Test the empty store."""
        store = ConfigStore.empty()

        assert store.active_profile is None
        assert store.profiles == {}
        assert store.to_document() == {"profiles": {}}

    def test_store_from_document(self):
        """Test parsing the documented file layout."""
        store = ConfigStore.model_validate({
            "activeProfile": "production",
            "profiles": {
                "production": {
                    "serverUrl": "https://prod.example.com",
                    "username": "admin",
                    "password": "secret",
                },
                "staging": {"serverUrl": "https://staging.example.com", "token": "abc123"},
            },
        })

        assert store.active_profile == "production"
        assert set(store.profiles) == {"production", "staging"}
        assert store.profiles["staging"].auth_type == "bearer"

    def test_document_omits_unset_active_profile(self):
        """Test that no activeProfile key is written when none is active."""
        store = ConfigStore(profiles={"dev": Profile(server_url="http://localhost:9090")})

        assert store.to_document() == {"profiles": {"dev": {"serverUrl": "http://localhost:9090"}}}

    def test_with_profiles_returns_new_store(self):
        """Test copy-on-write updates."""
        store = ConfigStore.empty()
        profiles = {"dev": Profile(server_url="http://localhost:9090")}

        updated = store.with_profiles(profiles, "dev")

        assert updated is not store
        assert store.profiles == {}
        assert store.active_profile is None
        assert updated.active_profile == "dev"
        assert list(updated.profiles) == ["dev"]

    def test_store_is_immutable(self):
        """Test that stores cannot be reassigned."""
        store = ConfigStore.empty()

        with pytest.raises(ValidationError):
            store.active_profile = "dev"

    def test_store_equality(self):
        """Test that stores with the same contents compare equal."""
        first = ConfigStore(
            active_profile="dev",
            profiles={"dev": Profile(server_url="http://localhost:9090")},
        )
        second = ConfigStore.model_validate(first.to_document())

        assert first == second
