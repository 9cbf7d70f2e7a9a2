"""
User Schemas (Profiles, Assignments, Activity Log, Auth)

Pydantic models for API request/response validation.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from talenteval.core.roles import ProfileStatus, Role


# Auth Schemas
class RegisterRequest(BaseModel):
    """Registration payload."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6, max_length=128)
    display_name: str | None = Field(None, max_length=200)


class LoginRequest(BaseModel):
    """Login payload."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)
    remember: bool = Field(default=False, description="Keep the session across browser restarts")


class PasswordResetRequest(BaseModel):
    """Password reset payload."""

    email: str = Field(..., min_length=3, max_length=320)


class AuthUserSchema(BaseModel):
    """Authenticated identity as returned by the provider."""

    uid: str
    email: str
    email_verified: bool = False
    display_name: str | None = None


class SessionSchema(BaseModel):
    """Login/registration response."""

    user: AuthUserSchema
    id_token: str
    persistence: str


# Profile Schemas
class Team(BaseModel):
    """A named group of students."""

    name: str = Field(..., min_length=1, max_length=200)
    students: list[str] = Field(default_factory=list)


class Assignments(BaseModel):
    """Students and teams assigned to a teacher or coach."""

    students: list[str] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    display_name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320)


class RoleUpdate(BaseModel):
    """Admin payload for assigning a role."""

    role: Role
    assignments: Assignments | None = None


class StatusUpdate(BaseModel):
    """Admin payload for changing a profile status."""

    status: ProfileStatus


class ProfileSchema(BaseModel):
    """Full profile schema for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str | None
    role: Role
    status: ProfileStatus
    assignments: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class ActivitySchema(BaseModel):
    """Activity log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    description: str
    user_id: str
    details: dict[str, Any]
    timestamp: datetime
