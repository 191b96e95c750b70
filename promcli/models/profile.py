"""Profile and configuration store models for the Prometheus CLI."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Literal

AuthType = Literal["none", "basic", "bearer"]


class Profile(BaseModel):
    """Connection profile for a single Prometheus server.

    The model only checks field types. Naming, URL and credential rules are
    enforced by the repository when a profile is added, so that legacy data
    can be carried over unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    server_url: str = Field(..., alias="serverUrl", description="Prometheus server URL")
    username: Optional[str] = Field(None, description="Basic auth username")
    password: Optional[str] = Field(None, description="Basic auth password")
    token: Optional[str] = Field(None, description="Bearer token")

    @field_validator("username", "password", "token", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty credentials as absent."""
        if v == "":
            return None
        return v

    @property
    def auth_type(self) -> AuthType:
        """Authentication mode implied by the credentials present."""
        if self.token:
            return "bearer"
        if self.username and self.password:
            return "basic"
        return "none"

    def to_document(self) -> Dict[str, Any]:
        """Convert profile to its on-disk dictionary form."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ConfigStore(BaseModel):
    """Complete persisted collection of profiles plus the active pointer.

    Stores are immutable values. Repository operations return new stores
    instead of modifying the one they were given.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    active_profile: Optional[str] = Field(
        None, alias="activeProfile", description="Name of the active profile"
    )
    profiles: Dict[str, Profile] = Field(default_factory=dict, description="Profiles by name")

    @classmethod
    def empty(cls) -> "ConfigStore":
        """Create a store with no profiles."""
        return cls()

    def to_document(self) -> Dict[str, Any]:
        """Convert store to its on-disk dictionary form."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def with_profiles(
        self, profiles: Dict[str, Profile], active_profile: Optional[str]
    ) -> "ConfigStore":
        """Return a copy of this store with new profiles and active pointer."""
        return self.model_copy(update={"profiles": profiles, "active_profile": active_profile})
