"""User Schemas — profile rows and identity-provider admin payloads.

Invariants:
    - UserNameUpdate.name: stripped, non-empty, at most 255 chars
    - AdminUserCreate.password: at least 6 chars (identity provider minimum)
    - Identity records from the provider are passed through as dicts, never re-modelled
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserProfileResponse(BaseModel):
    """User profile row as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None


class UserNameUpdate(BaseModel):
    """Display-name update — validates whitespace and length."""
    name: str = Field(max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class UserProfileMutationResponse(BaseModel):
    """Envelope for the name update — confirmation message plus the updated row."""
    message: str
    data: UserProfileResponse


class AdminUserCreate(BaseModel):
    """Account creation through the identity provider's admin API."""
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    name: str | None = Field(None, max_length=255)
    email_confirm: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None
