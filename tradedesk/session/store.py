"""
Session key-value stores.

The session lives in a small string-to-string store, the local analog of a
browser's localStorage. SessionManager only talks to the SessionStore
interface, so tests swap in MemorySessionStore while the CLI and dashboard
use JsonFileSessionStore.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
PHONE_KEY = "phone"
USER_KEY = "user"
EXPIRY_KEY = "expiry"

# Every key that makes up a session; always erased together
SESSION_KEYS = (TOKEN_KEY, PHONE_KEY, USER_KEY, EXPIRY_KEY)


class SessionStore(Protocol):
    """String key-value store holding the session fields."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear_all(self) -> None: ...


class MemorySessionStore:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear_all(self) -> None:
        for key in SESSION_KEYS:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the current contents."""
        return dict(self._data)


class JsonFileSessionStore:
    """
    Store persisted as a single JSON object on disk.

    The file is rewritten on every change so a crash never loses an
    acknowledged write. An unreadable file is treated as empty.
    """

    def __init__(self, path: str | Path = "data/session.json"):
        self.path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read session store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session store {self.path}: not a JSON object")
            return {}
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(self._data, f, indent=2)
        tmp_path.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()

    def clear_all(self) -> None:
        for key in SESSION_KEYS:
            self._data.pop(key, None)
        self._save()
