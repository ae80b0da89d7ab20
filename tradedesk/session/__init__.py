"""
Session lifecycle.

Token storage, expiry enforcement and login redirects.
"""

from tradedesk.session.manager import SESSION_EXPIRED_NOTICE, SessionManager
from tradedesk.session.store import (
    SESSION_KEYS,
    JsonFileSessionStore,
    MemorySessionStore,
    SessionStore,
)
from tradedesk.session.views import View

__all__ = [
    "JsonFileSessionStore",
    "MemorySessionStore",
    "SESSION_EXPIRED_NOTICE",
    "SESSION_KEYS",
    "SessionManager",
    "SessionStore",
    "View",
]
