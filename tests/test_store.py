#!/usr/bin/env python3
"""
Unit tests for the session key-value stores.

Run with:
    python -m pytest tests/test_store.py -v
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

# ruff: noqa: E402
from tradedesk.session.store import SESSION_KEYS, JsonFileSessionStore, MemorySessionStore


def fill(store) -> None:
    for key in SESSION_KEYS:
        store.set(key, f"{key}-value")


class TestMemorySessionStore:
    """Tests for MemorySessionStore."""

    def test_get_set_remove(self):
        store = MemorySessionStore()
        assert store.get("token") is None
        store.set("token", "abc")
        assert store.get("token") == "abc"
        store.remove("token")
        store.remove("token")
        assert store.get("token") is None

    def test_clear_all_only_session_keys(self):
        store = MemorySessionStore({"theme": "dark"})
        fill(store)

        store.clear_all()

        assert store.snapshot() == {"theme": "dark"}


class TestJsonFileSessionStore:
    """Tests for JsonFileSessionStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "session.json"
        fill(JsonFileSessionStore(path))

        reopened = JsonFileSessionStore(path)

        for key in SESSION_KEYS:
            assert reopened.get(key) == f"{key}-value"

    def test_clear_all_persists(self, tmp_path):
        path = tmp_path / "session.json"
        store = JsonFileSessionStore(path)
        fill(store)
        store.set("theme", "dark")

        store.clear_all()

        assert json.loads(path.read_text()) == {"theme": "dark"}

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileSessionStore(tmp_path / "absent.json")
        assert store.get("token") is None
        assert not (tmp_path / "absent.json").exists()

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")

        store = JsonFileSessionStore(path)

        assert store.get("token") is None
        store.set("token", "abc")
        assert json.loads(path.read_text()) == {"token": "abc"}

    def test_non_object_file_is_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("[1, 2]")
        assert JsonFileSessionStore(path).get("token") is None

    def test_no_temp_file_left(self, tmp_path):
        store = JsonFileSessionStore(tmp_path / "session.json")
        store.set("token", "abc")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["session.json"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
