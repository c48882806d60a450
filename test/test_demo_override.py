"""
Tests for demo accounts and override session stores.
"""

import json
from pathlib import Path

import pytest

from taskdesk.client.demo import DEMO_USERS, demo_profiles, enter_demo, get_demo_user
from taskdesk.client.override import (
    FileOverrideSessionStore,
    MemoryOverrideSessionStore,
    OverrideSession,
)
from taskdesk.shared.exceptions import NotFoundError
from taskdesk.users.models import UserRole


class TestDemoUsers:
    def test_catalogue(self) -> None:
        assert [u.id for u in DEMO_USERS] == [
            "admin_user",
            "reporter_user",
            "cameraman_user",
            "editor_user",
        ]
        assert get_demo_user("editor_user").role == UserRole.ASSIGNMENT_EDITOR
        assert "Manage users" in get_demo_user("admin_user").permissions

    def test_unknown_demo_user(self) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            enter_demo(MemoryOverrideSessionStore(), "intern_user")

        assert exc_info.value.message == "Demo user not found"

    @pytest.mark.parametrize(
        "demo_id,landing",
        [
            ("admin_user", "/admin"),
            ("editor_user", "/admin"),
            ("reporter_user", "/dashboard"),
            ("cameraman_user", "/dashboard"),
        ],
    )
    def test_enter_demo_returns_landing_path(self, demo_id: str, landing: str) -> None:
        assert enter_demo(MemoryOverrideSessionStore(), demo_id) == landing

    def test_enter_demo_persists_override(self) -> None:
        store = MemoryOverrideSessionStore()

        enter_demo(store, "cameraman_user")

        assert store.load() == {
            "demoMode": True,
            "uid": "cameraman_user",
            "email": "mike@demo.com",
            "displayName": "Mike Camera",
        }

    def test_demo_profiles_are_complete(self) -> None:
        profiles = demo_profiles()

        assert {p.uid for p in profiles} == {u.id for u in DEMO_USERS}
        assert all(p.profile_complete and p.is_active for p in profiles)


class TestFileOverrideSessionStore:
    def test_save_load_clear(self, tmp_path: Path) -> None:
        store = FileOverrideSessionStore(tmp_path / "nested" / "session.json")
        session = OverrideSession(uid="alice", email="alice@example.com", display_name="Alice")

        assert store.load() is None
        store.save(session)
        loaded = store.load()
        store.clear()

        assert OverrideSession.model_validate(loaded) == session
        assert loaded["displayName"] == "Alice"
        assert not store.path.exists()
        assert store.load() is None

    def test_file_contains_camel_case_json(self, tmp_path: Path) -> None:
        store = FileOverrideSessionStore(tmp_path / "session.json")

        enter_demo(store, "reporter_user")

        assert json.loads(store.path.read_text(encoding="utf-8"))["uid"] == "reporter_user"

    def test_clear_without_file(self, tmp_path: Path) -> None:
        FileOverrideSessionStore(tmp_path / "missing.json").clear()

    def test_corrupt_file_is_returned_raw(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")

        assert FileOverrideSessionStore(path).load() == "{not json"

    def test_non_utf8_file_is_returned_raw(self, tmp_path: Path) -> None:
        path = tmp_path / "session.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        loaded = FileOverrideSessionStore(path).load()

        assert isinstance(loaded, str)
        assert loaded.endswith("garbage")
