"""
Session bootstrap: resolves the signed-in identity to an application profile.

States::

    Initializing --start--> Resolving(identity) --lookup--> Ready(identity, profile?)
    Initializing --start, no identity--> Ready(None, None)

Every identity change restarts at ``Resolving``. A lookup superseded by a
newer identity change, or finishing after :meth:`SessionBootstrap.close`,
never publishes its result.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, Union

from pydantic import ValidationError as PydanticValidationError

from taskdesk.client.identity import Identity, IdentityProvider, Unsubscribe
from taskdesk.client.override import (
    MemoryOverrideSessionStore,
    OverrideSession,
    OverrideSessionStore,
)
from taskdesk.shared.exceptions import ApiError, TransportError
from taskdesk.shared.logging import get_logger
from taskdesk.users.models import User, UserRole

logger = get_logger(__name__)


@dataclass(frozen=True)
class Initializing:
    @property
    def loading(self) -> bool:
        return True


@dataclass(frozen=True)
class Resolving:
    identity: Identity

    @property
    def loading(self) -> bool:
        return True


@dataclass(frozen=True)
class Ready:
    identity: Identity | None = None
    profile: User | None = None

    @property
    def loading(self) -> bool:
        return False


SessionState = Union[Initializing, Resolving, Ready]
StateListener = Callable[[SessionState], None]


@dataclass(frozen=True)
class RoleFlags:
    """Capabilities derived from the profile role."""

    is_admin: bool = False
    is_reporter: bool = False
    is_cameraman: bool = False
    can_manage_users: bool = False
    can_create_tasks: bool = False

    @classmethod
    def from_profile(cls, profile: User | None) -> "RoleFlags":
        if profile is None:
            return cls()
        is_admin = profile.role.is_elevated
        is_reporter = profile.role == UserRole.REPORTER
        is_cameraman = profile.role == UserRole.CAMERAMAN
        return cls(
            is_admin=is_admin,
            is_reporter=is_reporter,
            is_cameraman=is_cameraman,
            can_manage_users=is_admin,
            can_create_tasks=is_admin or is_reporter or is_cameraman,
        )


class ProfileClient(Protocol):
    async def get_user_by_uid(self, uid: str) -> User | None: ...


class SessionBootstrap:
    """Tracks identity and profile for the running client."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        profile_client: ProfileClient,
        override_store: OverrideSessionStore | None = None,
    ) -> None:
        self._provider = identity_provider
        self._profiles = profile_client
        self._override_store = override_store or MemoryOverrideSessionStore()

        self._state: SessionState = Initializing()
        self._listeners: list[StateListener] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._unsubscribe_provider: Unsubscribe | None = None
        self._generation = 0
        self._override_active = False
        self._closed = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def role_flags(self) -> RoleFlags:
        profile = self._state.profile if isinstance(self._state, Ready) else None
        return RoleFlags.from_profile(profile)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Register a listener called with every new state."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> SessionState:
        """Resolve the initial identity and return the resulting state.

        A well-formed override session takes precedence over the identity
        provider; otherwise the provider is subscribed to and its current
        identity resolved.
        """
        override = self._load_override()
        if override is not None:
            self._override_active = True
            logger.info("Resuming override session", extra={"uid": override.uid})
            task = self._begin(override.to_identity())
        else:
            self._subscribe_provider()
            task = self._begin(self._provider.current_identity)

        if task is not None:
            await task
        return self._state

    async def wait_idle(self) -> None:
        """Wait until no profile lookup is in flight."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def sign_out(self) -> None:
        """Clear the override session and sign out of the identity provider."""
        self._override_store.clear()
        await self._provider.sign_out()

        if self._override_active:
            self._override_active = False
            self._begin(None)
            self._subscribe_provider()

    def close(self) -> None:
        """Stop tracking. No state is published after this returns."""
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe_provider is not None:
            self._unsubscribe_provider()
            self._unsubscribe_provider = None
        self._listeners.clear()
        logger.debug("Session bootstrap closed")

    # -------------------------------------------------------------- internals

    def _load_override(self) -> OverrideSession | None:
        raw: Any = self._override_store.load()
        if raw is None:
            return None
        try:
            session = OverrideSession.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(
                "Discarding malformed override session",
                extra={"errors": e.error_count()},
            )
            self._override_store.clear()
            return None
        return session if session.demo_mode else None

    def _subscribe_provider(self) -> None:
        if self._unsubscribe_provider is None and not self._closed:
            self._unsubscribe_provider = self._provider.subscribe(self._on_identity_changed)

    def _on_identity_changed(self, identity: Identity | None) -> None:
        self._begin(identity)

    def _begin(self, identity: Identity | None) -> asyncio.Task[None] | None:
        if self._closed:
            return None

        self._generation += 1
        if identity is None:
            self._publish(Ready(None, None))
            return None

        self._publish(Resolving(identity))
        task = asyncio.get_running_loop().create_task(
            self._resolve(identity, self._generation)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _resolve(self, identity: Identity, generation: int) -> None:
        try:
            profile = await self._profiles.get_user_by_uid(identity.uid)
        except (TransportError, ApiError) as e:
            logger.warning(
                "Profile lookup failed",
                extra={"uid": identity.uid, "error": e.message},
            )
            profile = None

        if self._closed or generation != self._generation:
            logger.debug("Discarding superseded profile lookup", extra={"uid": identity.uid})
            return

        if profile is None:
            logger.info("No profile for identity", extra={"uid": identity.uid})
        self._publish(Ready(identity, profile))

    def _publish(self, state: SessionState) -> None:
        if self._closed:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)
