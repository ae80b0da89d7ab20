"""Views of the client and which of them need a logged-in session."""

from enum import Enum


class View(Enum):
    """A screen the user can be on."""

    LANDING = "landing"
    LOGIN = "login"
    REGISTER = "register"
    DASHBOARD = "dashboard"
    PROFILE = "profile"

    @property
    def is_public(self) -> bool:
        """Reachable without a session."""
        return self in PUBLIC_VIEWS

    @property
    def requires_auth(self) -> bool:
        return self in PROTECTED_VIEWS


PUBLIC_VIEWS = frozenset({View.LANDING, View.LOGIN, View.REGISTER})
PROTECTED_VIEWS = frozenset({View.DASHBOARD, View.PROFILE})
