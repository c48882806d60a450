"""
Pydantic request schemas for admin profiles.
"""

from pydantic import Field, model_validator

from taskdesk.shared.schemas import CamelModel, reject_explicit_nulls


class AdminProfileCreate(CamelModel):
    """Schema for creating an admin profile."""

    user_id: str = Field(..., min_length=1, description="User uid")
    privileges: list[str] = Field(default_factory=list, description="Ordered capability strings")


class AdminProfileUpdate(CamelModel):
    """Schema for replacing the privilege list of an admin profile."""

    privileges: list[str] | None = Field(None, description="Ordered capability strings")

    @model_validator(mode="after")
    def validate_privileges_not_null(self) -> "AdminProfileUpdate":
        reject_explicit_nulls(self, frozenset({"privileges"}))
        return self
