# =============================================================================
# core/views.py - Client View States
# =============================================================================
# Declarative table of the client's routed views, plus the matcher the
# page router uses to resolve a browser path (HTML5 mode, no hash prefix).
#
# States are matched in declaration order, so "/contacts/new" is listed
# before "/contacts/:id" and the "*path" catch-all comes last.
#
# Guards:
# - ALREADY_LOGGED_IN: a logged-in user is sent to the dashboard
# - NOT_LOGGED_IN:     an anonymous user is sent to the login page
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Guard(str, Enum):
    """Redirect rules attached to a view state."""
    NONE = "none"
    ALREADY_LOGGED_IN = "alreadyLoggedIn"
    NOT_LOGGED_IN = "notLoggedIn"


@dataclass(frozen=True)
class ViewState:
    """
    One routed view.

    `url` uses the client router's syntax: ":name" for a path parameter
    and "*name" for a catch-all that swallows the rest of the path.
    """
    name: str
    url: str
    template_url: str
    title: str
    guard: Guard = Guard.NONE
    controller: str | None = None
    controller_as: str | None = None
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", _compile(self.url))

    def match(self, path: str) -> dict[str, str] | None:
        """Return the path parameters if `path` is this state's url."""
        m = self.pattern.fullmatch(path)
        return m.groupdict() if m else None

    def href(self, **params: str) -> str:
        """Build the url for this state."""
        url = self.url
        for key, value in params.items():
            url = url.replace(f":{key}", value).replace(f"*{key}", value)
        return url

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "url": self.url,
            "templateUrl": self.template_url,
            "title": self.title,
            "guard": self.guard.value,
            "controller": self.controller,
            "controllerAs": self.controller_as,
        }


def _compile(url: str) -> re.Pattern:
    parts = []
    for segment in re.split(r"(:\w+|\*\w+)", url):
        if segment.startswith(":"):
            parts.append(f"(?P<{segment[1:]}>[^/]+)")
        elif segment.startswith("*"):
            parts.append(f"(?P<{segment[1:]}>.*)")
        else:
            parts.append(re.escape(segment))
    return re.compile("".join(parts))


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a path against the state table."""
    state: ViewState
    params: dict[str, str]
    redirect_to: ViewState | None = None

    @property
    def status_code(self) -> int:
        if self.state.name == "notFound":
            return 404
        if self.state.name == "unauthorized":
            return 401
        return 200

    def to_dict(self) -> dict:
        return {
            "state": self.state.name,
            "url": self.state.url,
            "templateUrl": self.state.template_url,
            "title": self.state.title,
            "params": self.params,
            "redirect": self.redirect_to.href() if self.redirect_to else None,
            "status": self.status_code,
        }


# =============================================================================
# State Table
# =============================================================================

LOGIN = ViewState(
    name="login",
    url="/login",
    template_url="/features/login/login.html",
    title="Login",
    guard=Guard.ALREADY_LOGGED_IN,
)

DASHBOARD = ViewState(
    name="dashboard",
    url="/",
    template_url="/features/dashboard/dashboard.html",
    title="Dashboard",
    guard=Guard.NOT_LOGGED_IN,
    controller="DashboardController",
    controller_as="dashboardCtrl",
)

CONTACTS_INDEX = ViewState(
    name="contacts",
    url="/contacts",
    template_url="/features/contact/contact.index.html",
    title="Contacts",
    guard=Guard.NOT_LOGGED_IN,
    controller="ContactController",
    controller_as="contactCtrl",
)

CONTACTS_NEW = ViewState(
    name="contacts-new",
    url="/contacts/new",
    template_url="/features/contact/contact.update.html",
    title="New Contact",
    guard=Guard.NOT_LOGGED_IN,
    controller="ContactController",
    controller_as="contactCtrl",
)

CONTACTS_EDIT = ViewState(
    name="contacts-edit",
    url="/contacts/:id",
    template_url="/features/contact/contact.update.html",
    title="Edit Contact",
    guard=Guard.NOT_LOGGED_IN,
    controller="ContactController",
    controller_as="contactCtrl",
)

UNAUTHORIZED = ViewState(
    name="unauthorized",
    url="/401",
    template_url="/features/error/401.html",
    title="401 - Unauthorized",
)

NOT_FOUND = ViewState(
    name="notFound",
    url="*path",
    template_url="/features/error/404.html",
    title="404 - Not Found",
)

STATES: tuple[ViewState, ...] = (
    LOGIN,
    DASHBOARD,
    CONTACTS_INDEX,
    CONTACTS_NEW,
    CONTACTS_EDIT,
    UNAUTHORIZED,
    NOT_FOUND,
)


def get_state(name: str) -> ViewState:
    """Look up a state by name. Raises KeyError for unknown names."""
    for state in STATES:
        if state.name == name:
            return state
    raise KeyError(name)


def match_path(path: str) -> tuple[ViewState, dict[str, str]]:
    """Find the first state whose url matches `path`."""
    if not path.startswith("/"):
        path = "/" + path
    # "/contacts/" and "/contacts" are the same view
    if len(path) > 1:
        path = path.rstrip("/") or "/"

    for state in STATES:
        params = state.match(path)
        if params is not None:
            return state, params

    # Unreachable while the catch-all is registered
    return NOT_FOUND, {"path": path}


def resolve(path: str, logged_in: bool) -> Resolution:
    """
    Resolve a browser path for a visitor.

    Applies the matched state's guard: a logged-in visitor on the login
    page is sent to the dashboard, an anonymous visitor on a protected
    page is sent to login.
    """
    state, params = match_path(path)

    redirect_to = None
    if state.guard is Guard.ALREADY_LOGGED_IN and logged_in:
        redirect_to = DASHBOARD
    elif state.guard is Guard.NOT_LOGGED_IN and not logged_in:
        redirect_to = LOGIN

    return Resolution(state=state, params=params, redirect_to=redirect_to)
