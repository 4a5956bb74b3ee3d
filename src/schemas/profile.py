"""Profile Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, Field

SERVER_ERROR_KEY = "server"


class UserProfile(BaseModel):
    """A stored user profile.

    The id is assigned by the server and never changes.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(description="Profile unique identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    bio: str | None = Field(default=None, description="Short biography (max 200 characters)")
    avatar: str | None = Field(default=None, description="Avatar URL or data reference")


class ProfileFormValues(BaseModel):
    """Editable working copy of a profile, without the id."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    bio: str = Field(default="", description="Short biography")
    avatar: str | None = Field(default=None, description="Stored avatar URL")

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileFormValues":
        """Build a working copy from a stored profile."""
        return cls(
            name=profile.name,
            email=profile.email,
            bio=profile.bio or "",
            avatar=profile.avatar,
        )


class FormState(BaseModel):
    """Result of the most recent submission attempt.

    Always replaced as a whole, never partially updated.
    """

    model_config = ConfigDict(frozen=True)

    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Field name to ordered error messages; 'server' holds general errors",
    )
    success: bool = Field(default=False, description="Whether the submission was saved")
    message: str | None = Field(default=None, description="Localized summary message")

    @property
    def server_errors(self) -> list[str]:
        """General errors not attached to a form field."""
        return self.errors.get(SERVER_ERROR_KEY, [])


class UserUpdateRequest(BaseModel):
    """JSON body for PUT /api/user."""

    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    bio: str | None = Field(default=None, description="Short biography")


class UserEnvelope(BaseModel):
    """Response body for GET /api/user."""

    user: UserProfile


class UserUpdateResponse(BaseModel):
    """Response body for PUT /api/user."""

    success: bool = Field(description="Whether the update was accepted")
    user: UserProfile | None = Field(default=None, description="Updated profile")
    errors: dict[str, list[str]] | None = Field(default=None, description="Field validation errors")
    message: str | None = Field(default=None, description="Summary message")
