"""School Schemas — Pydantic models for the schools API boundary.

Invariants:
    - SchoolCreate carries optional fields; presence of the required ones is checked by the route
      so every missing-field response has the same BAD_INPUT shape
    - SchoolUpdate rejects null for columns the store declares NOT NULL
    - Strings are stripped before they reach the store

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class SchoolCreate(BaseModel):
    """School creation payload."""
    name: str | None = Field(None, max_length=255)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)
    school_email: str | None = Field(None, max_length=255)
    location: str | None = None
    active: bool = True

    @field_validator("name", "address", "phone", "school_email", "location")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip(v)


class SchoolUpdate(BaseModel):
    """Partial school update — only fields the client sends are written."""
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    phone: str | None = Field(None, min_length=1, max_length=50)
    school_email: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = None
    active: bool | None = None

    @field_validator(
        "name", "address", "phone", "school_email", "active", mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return _strip(v)

    @field_validator("location")
    @classmethod
    def strip_location(cls, v: str | None) -> str | None:
        return _strip(v)


class SchoolResponse(BaseModel):
    """School record as stored."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    phone: str
    school_email: str
    location: str | None = None
    active: bool


class SchoolMutationResponse(BaseModel):
    """Envelope for update/delete — confirmation message plus the affected record."""
    message: str
    data: SchoolResponse
