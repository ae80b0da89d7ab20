"""
Session Manager

Owns the authentication token and its expiry, talks to the auth endpoints,
and decides when the current view has to be sent back to login.

State machine:
    Anonymous --login success--> Active
    Active --logout | expiry detected | 401 received--> Anonymous

Register and password-reset requests never move the state machine.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from tradedesk.api.client import TradeDeskAPI
from tradedesk.api.models import APIError, network_error_result
from tradedesk.core.config import DEFAULT_CONFIG, ClientConfig
from tradedesk.core.formatting import whatsapp_link
from tradedesk.session.store import (
    EXPIRY_KEY,
    PHONE_KEY,
    TOKEN_KEY,
    USER_KEY,
    SessionStore,
)
from tradedesk.session.views import View

logger = logging.getLogger(__name__)

SESSION_EXPIRED_NOTICE = "Your session has expired. Please login again."
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"
PASSWORD_RESET_MESSAGE = "Hi Support, I need a password reset."


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SessionManager:
    """
    Session lifecycle on top of a SessionStore and the TradeDesk API.

    Usage:
        session = SessionManager(api, JsonFileSessionStore(), current_view=View.DASHBOARD)
        session.init()
        await session.login("671234567", "secret")
        profile = await session.get_user_data()
    """

    def __init__(
        self,
        api: TradeDeskAPI,
        store: SessionStore,
        config: ClientConfig = DEFAULT_CONFIG,
        current_view: View = View.LANDING,
        clock: Callable[[], datetime] = utc_now,
        on_navigate: Callable[[View], None] | None = None,
        on_notice: Callable[[str], None] | None = None,
    ):
        """
        Initialize the session manager.

        Args:
            api: Client for the backend endpoints
            store: Where the four session keys are kept
            config: Client configuration (session length, support number)
            current_view: The view this manager is serving
            clock: Returns the current time (timezone-aware)
            on_navigate: Called with the target view when a redirect happens
            on_notice: Called with a message the user should see
        """
        self.api = api
        self.store = store
        self.config = config
        self.current_view = current_view
        self.clock = clock
        self.on_navigate = on_navigate
        self.on_notice = on_notice

    # =========================================================
    # Stored session
    # =========================================================

    @property
    def token(self) -> str | None:
        return self.store.get(TOKEN_KEY)

    @property
    def phone(self) -> str | None:
        return self.store.get(PHONE_KEY)

    @property
    def user(self) -> dict[str, Any] | None:
        """The profile stored at login, or None."""
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user profile is not valid JSON")
            return None
        return user if isinstance(user, dict) else None

    @property
    def expiry(self) -> datetime | None:
        raw = self.store.get(EXPIRY_KEY)
        return parse_timestamp(raw) if raw else None

    def _write_session(self, token: str, phone: str, user: Any) -> datetime:
        """Persist a new session. The token goes last so it never exists without an expiry."""
        expiry = self.clock() + timedelta(days=self.config.session_days)

        self.store.remove(TOKEN_KEY)
        self.store.set(EXPIRY_KEY, expiry.isoformat())
        self.store.set(PHONE_KEY, phone)
        self.store.set(USER_KEY, json.dumps(user))
        self.store.set(TOKEN_KEY, token)
        return expiry

    def clear_session(self) -> None:
        """Erase token, phone, user and expiry together."""
        self.store.remove(TOKEN_KEY)
        self.store.clear_all()

    def _end_session(self, reason: str) -> None:
        logger.info(f"Session cleared: {reason}")
        self.clear_session()

    # =========================================================
    # Validity
    # =========================================================

    def is_authenticated(self) -> bool:
        """
        Check the stored session.

        Valid iff a token and an expiry are stored and the expiry hasn't
        passed. Anything else clears whatever is left of the session.
        """
        token = self.token
        raw_expiry = self.store.get(EXPIRY_KEY)

        if not token and not raw_expiry:
            if self.store.get(PHONE_KEY) or self.store.get(USER_KEY):
                self._end_session("partial session without token")
            return False

        if not token or not raw_expiry:
            self._end_session("partial session")
            return False

        expiry = parse_timestamp(raw_expiry)
        if expiry is None:
            self._end_session("unreadable expiry")
            return False

        if self.clock() > expiry:
            self._end_session("expired")
            return False

        return True

    def _active_token(self) -> str | None:
        """Token for an authenticated call, after the lazy expiry check."""
        return self.token if self.is_authenticated() else None

    def _check_session_expiry(self) -> bool:
        """Clear an expired session. Returns True if one was found."""
        expiry = self.expiry
        if expiry is None or self.clock() <= expiry:
            return False

        self._end_session("expired")
        if self.current_view == View.DASHBOARD:
            self._notify(SESSION_EXPIRED_NOTICE)
            self.redirect_to_login()
        return True

    # =========================================================
    # Navigation
    # =========================================================

    def redirect_to_login(self) -> None:
        """Send the user to the login view unless they're on a public one."""
        if self.current_view.is_public:
            return

        logger.info(f"Redirecting from {self.current_view.value} to login")
        self.current_view = View.LOGIN
        if self.on_navigate:
            self.on_navigate(View.LOGIN)

    def _notify(self, message: str) -> None:
        if self.on_notice:
            self.on_notice(message)

    def init(self) -> bool:
        """
        Page-load check.

        Clears an expired session (with a notice on the dashboard), then
        redirects if this view needs a session and there isn't one.

        Returns:
            True if the session is active
        """
        self._check_session_expiry()

        authenticated = self.is_authenticated()
        if not authenticated and self.current_view.requires_auth:
            self.redirect_to_login()
        return authenticated

    def validate_session(self) -> bool:
        """Local validity check that redirects on failure."""
        if not self.is_authenticated():
            self.redirect_to_login()
            return False
        return True

    async def validate_remote(self) -> bool:
        """
        Ask the server whether the token is still accepted.

        Returns:
            True on a 2xx, False otherwise (including transport failure)
        """
        token = self._active_token()
        if not token:
            return False

        try:
            response = await self.api.validate(token)
        except APIError as e:
            logger.error(f"Validate session error: {e}")
            return False

        if response.unauthorized:
            self._end_session("token rejected by server")
        return response.ok

    # =========================================================
    # Auth endpoints
    # =========================================================

    async def register(self, phone: str, password: str, referral_code: str | None = None) -> dict[str, Any]:
        """Create an account. Does not log in."""
        try:
            response = await self.api.register(phone, password, referral_code)
        except APIError as e:
            logger.error(f"Registration error: {e}")
            return network_error_result()
        return response.data

    async def login(self, phone: str, password: str) -> dict[str, Any]:
        """
        Log in and persist the session on success.

        Returns:
            The API's response body, or a network-error result
        """
        try:
            response = await self.api.login(phone, password)
        except APIError as e:
            logger.error(f"Login error: {e}")
            return network_error_result()

        data = response.data
        if not data.get("success"):
            return data

        token = data.get("token")
        if not isinstance(token, str) or not token:
            logger.error("Login reported success without a token; session not stored")
            return data

        expiry = self._write_session(token, phone, data.get("user"))
        logger.info(f"Logged in, session valid until {expiry.isoformat()}")
        return data

    async def logout(self) -> None:
        """Notify the server (best effort) and always clear the local session."""
        token = self.token
        try:
            if token:
                await self.api.logout(token)
        except APIError as e:
            logger.error(f"Logout error: {e}")
        finally:
            self._end_session("logout")

    async def get_user_data(self) -> dict[str, Any] | None:
        """
        Fetch the user's profile.

        Returns None without a session, after a 401 (which also clears the
        session) and on transport failure (session kept).
        """
        token = self._active_token()
        if not token:
            return None

        try:
            response = await self.api.user_data(token)
        except APIError as e:
            logger.error(f"Get user data error: {e}")
            return None

        if response.unauthorized:
            self._end_session("token rejected by server")
            return None

        return response.data

    async def change_password(self, old_password: str, new_password: str) -> dict[str, Any]:
        token = self._active_token()
        if not token:
            return {"success": False, "message": NOT_AUTHENTICATED_MESSAGE}

        try:
            response = await self.api.change_password(token, old_password, new_password)
        except APIError as e:
            logger.error(f"Change password error: {e}")
            return network_error_result()

        if response.unauthorized:
            self._end_session("token rejected by server")
            return response.data or {"success": False, "message": NOT_AUTHENTICATED_MESSAGE}
        return response.data

    async def request_password_reset(self, phone: str) -> dict[str, Any]:
        try:
            response = await self.api.forgot_password(phone)
        except APIError as e:
            logger.error(f"Password reset error: {e}")
            return network_error_result()
        return response.data

    def password_reset_link(self) -> str:
        """WhatsApp link to ask support for a manual reset."""
        return whatsapp_link(PASSWORD_RESET_MESSAGE, self.config.whatsapp_number)
