"""
Admin privilege records.
"""

from datetime import datetime

from pydantic import Field

from taskdesk.shared.schemas import CamelModel


class AdminProfile(CamelModel):
    """Supplementary privilege record, one-to-one with a user identity."""

    id: int
    user_id: str
    privileges: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
