"""
Identity provider interface and an in-process implementation.

The identity provider only answers "who is signed in"; the application
profile (role, completion) is looked up separately through the REST API.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from taskdesk.shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """An authenticated identity as reported by the provider."""

    uid: str
    email: str
    display_name: str | None = None
    photo_url: str | None = None
    email_verified: bool = False


IdentityListener = Callable[[Identity | None], None]
Unsubscribe = Callable[[], None]


class IdentityProvider(Protocol):
    """External authentication service."""

    @property
    def current_identity(self) -> Identity | None: ...

    def subscribe(self, listener: IdentityListener) -> Unsubscribe:
        """Register a listener called with the new identity (or None) on change."""
        ...

    async def sign_out(self) -> None: ...


class LocalIdentityProvider:
    """In-process identity provider.

    Listeners are called synchronously, in subscription order, whenever the
    identity changes.
    """

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    @property
    def current_identity(self) -> Identity | None:
        return self._identity

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: IdentityListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, identity: Identity) -> None:
        logger.info("Identity signed in", extra={"uid": identity.uid})
        self._set(identity)

    async def sign_out(self) -> None:
        if self._identity is not None:
            logger.info("Identity signed out", extra={"uid": self._identity.uid})
        self._set(None)

    def _set(self, identity: Identity | None) -> None:
        self._identity = identity
        for listener in list(self._listeners):
            listener(identity)
