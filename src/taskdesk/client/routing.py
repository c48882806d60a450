"""
Route dispatcher: decides what the client shows for a path.

:func:`dispatch` is pure and total; callers re-run it on every session state
change instead of caching a decision.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from taskdesk.client.session import Ready, SessionState
from taskdesk.users.models import UserRole


class View(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    SIGNUP = "signup"
    DEMO = "demo"
    PROFILE_SETUP = "profile-setup"
    ADMIN_DASHBOARD = "admin-dashboard"
    USER_MANAGEMENT = "user-management"
    TASK_MANAGEMENT = "task-management"
    ANALYTICS = "analytics"
    SETTINGS = "settings"
    REPORTER_DASHBOARD = "reporter-dashboard"
    CAMERAMAN_DASHBOARD = "cameraman-dashboard"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class Render:
    view: View


@dataclass(frozen=True)
class Redirect:
    to: str


Decision = Union[Render, Redirect]

LOGIN_PATH = "/login"
PROFILE_SETUP_PATH = "/profile-setup"
ADMIN_PATH = "/admin"
DASHBOARD_PATH = "/dashboard"

PUBLIC_VIEWS: dict[str, View] = {
    "/login": View.LOGIN,
    "/signup": View.SIGNUP,
    "/demo": View.DEMO,
}

ADMIN_VIEWS: dict[str, View] = {
    "/admin": View.ADMIN_DASHBOARD,
    "/admin/users": View.USER_MANAGEMENT,
    "/admin/tasks": View.TASK_MANAGEMENT,
    "/admin/analytics": View.ANALYTICS,
    "/admin/settings": View.SETTINGS,
}

# Paths that only make sense before the profile is complete
ENTRY_PATHS = frozenset({"/", "/login", "/signup", "/profile-setup"})


def normalize_path(path: str) -> str:
    """Strip query string, fragment and trailing slash; '' becomes '/'."""
    for sep in ("?", "#"):
        path = path.split(sep, 1)[0]
    path = path.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return path


def landing_path(role: UserRole) -> str:
    return ADMIN_PATH if role.is_elevated else DASHBOARD_PATH


def dashboard_view(role: UserRole) -> View:
    if role == UserRole.REPORTER:
        return View.REPORTER_DASHBOARD
    if role == UserRole.CAMERAMAN:
        return View.CAMERAMAN_DASHBOARD
    return View.ADMIN_DASHBOARD


def dispatch(state: SessionState, path: str) -> Decision:
    """Decide whether ``path`` renders a view or redirects elsewhere."""
    if state.loading or not isinstance(state, Ready):
        return Render(View.LOADING)

    path = normalize_path(path)
    identity = state.identity
    profile = state.profile

    if identity is None:
        view = PUBLIC_VIEWS.get(path)
        return Render(view) if view is not None else Redirect(LOGIN_PATH)

    if profile is None or not profile.profile_complete:
        if path == PROFILE_SETUP_PATH:
            return Render(View.PROFILE_SETUP)
        return Redirect(PROFILE_SETUP_PATH)

    role = profile.role
    if path in ENTRY_PATHS:
        return Redirect(landing_path(role))
    if path == "/demo":
        return Render(View.DEMO)
    if path in ADMIN_VIEWS:
        if role.is_elevated:
            return Render(ADMIN_VIEWS[path])
        return Redirect(DASHBOARD_PATH)
    if path == DASHBOARD_PATH:
        return Render(dashboard_view(role))
    return Render(View.NOT_FOUND)
