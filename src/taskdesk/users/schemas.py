"""
Pydantic request schemas for user management.
"""

from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from taskdesk.shared.schemas import CamelModel, reject_explicit_nulls
from taskdesk.users.models import UserRole


class UserCreate(CamelModel):
    """Schema for creating a user profile (server-assigned fields omitted)."""

    uid: str = Field(..., min_length=1, description="External identity key")
    full_name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr = Field(..., description="User email")
    role: UserRole = Field(..., description="Newsroom role")
    photo_url: str | None = Field(default="", description="Avatar URL")
    fcm_token: str | None = Field(default="", description="Push notification token")
    profile_complete: bool = Field(default=False, description="Role chosen")
    is_active: bool = Field(default=True, description="Account enabled")
    last_active: datetime | None = Field(default=None, description="Last activity time")


class UserUpdate(CamelModel):
    """Schema for updating a user.

    All fields are optional to support partial updates.
    """

    uid: str | None = Field(None, min_length=1)
    full_name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    role: UserRole | None = None
    photo_url: str | None = None
    fcm_token: str | None = None
    profile_complete: bool | None = None
    is_active: bool | None = None
    last_active: datetime | None = None

    @model_validator(mode="after")
    def validate_required_not_null(self) -> "UserUpdate":
        reject_explicit_nulls(
            self,
            frozenset({"uid", "full_name", "email", "role", "profile_complete", "is_active"}),
        )
        return self
