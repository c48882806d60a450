"""
Persisted override session used by demo mode.

When present and well-formed, the override session replaces the identity
provider as the source of the signed-in identity.
"""

import json
from pathlib import Path
from typing import Any, Protocol

from pydantic import Field

from taskdesk.client.identity import Identity
from taskdesk.shared.logging import get_logger
from taskdesk.shared.schemas import CamelModel

logger = get_logger(__name__)


class OverrideSession(CamelModel):
    """Demo identity persisted on the client."""

    demo_mode: bool = True
    uid: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    display_name: str | None = None

    def to_identity(self) -> Identity:
        return Identity(
            uid=self.uid,
            email=self.email,
            display_name=self.display_name,
            photo_url=None,
            email_verified=True,
        )


class OverrideSessionStore(Protocol):
    """Storage for the raw override session payload.

    ``load`` returns whatever was stored, unvalidated; callers decide whether
    it is well-formed.
    """

    def load(self) -> Any | None: ...

    def save(self, session: OverrideSession) -> None: ...

    def clear(self) -> None: ...


class MemoryOverrideSessionStore:
    """Override session store kept in process memory."""

    def __init__(self, raw: Any | None = None) -> None:
        self._raw = raw

    def load(self) -> Any | None:
        return self._raw

    def save(self, session: OverrideSession) -> None:
        self._raw = session.model_dump(by_alias=True)

    def clear(self) -> None:
        self._raw = None


class FileOverrideSessionStore:
    """Override session store backed by a JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any | None:
        """Return the decoded file contents, or None if absent.

        Contents that are not UTF-8 JSON are returned as text (undecodable
        bytes replaced) so the caller treats them as malformed.
        """
        if not self._path.exists():
            return None
        data = self._path.read_bytes()
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning(
                "Override session file is not valid JSON",
                extra={"path": str(self._path)},
            )
            return data.decode("utf-8", errors="replace")

    def save(self, session: OverrideSession) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(session.model_dump(by_alias=True)),
            encoding="utf-8",
        )

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
