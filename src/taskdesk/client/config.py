"""
Client-side configuration for the REST client and session bootstrap.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="TASKDESK_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = Field(default="http://localhost:8000")
    request_timeout_seconds: float = Field(default=10.0, ge=1, le=120)

    # Where the demo override session is persisted between runs
    override_session_path: Path = Field(
        default=Path.home() / ".taskdesk" / "session.json",
        description="JSON file holding the demo override session.",
    )


def get_client_settings() -> ClientSettings:
    return ClientSettings()
