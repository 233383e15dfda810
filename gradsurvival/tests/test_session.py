"""
Tests for session stores and the session manager.

Tests:
- In-memory and JSON file stores
- Last write wins
- Unreadable files
- Manager errors leave stored sessions untouched
"""

import threading
from dataclasses import replace

import pytest

from ..engine_core.errors import SessionNotFound, UnknownAction
from ..engine_core.state import new_session
from ..session import InMemorySessionStore, JsonFileSessionStore, SessionManager
from .conftest import NO_EVENT_DRAW


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """Each store test runs against both stores."""
    if request.param == "memory":
        return InMemorySessionStore()
    return JsonFileSessionStore(tmp_path / "sessions")


@pytest.fixture
def manager(processor):
    return SessionManager(store=InMemorySessionStore(), processor=processor)


class TestSessionStore:
    """Tests shared by both stores."""

    def test_create_stores_fresh_session(self, store):
        session = store.create()
        assert store.get(session.session_id) == session
        assert session.session_id in store.list_ids()

    def test_missing_session(self, store):
        assert store.get("nope") is None

    def test_last_write_wins(self, store):
        session = store.create()
        store.put(session.session_id, replace(session, day=5))
        store.put(session.session_id, replace(session, day=9))
        assert store.get(session.session_id).day == 9

    def test_delete(self, store):
        session = store.create()
        assert store.delete(session.session_id)
        assert store.get(session.session_id) is None
        assert not store.delete(session.session_id)

    def test_stored_copy_is_independent(self, store):
        """Getting twice returns equal but separate values."""
        session = store.create()
        first = store.get(session.session_id)
        second = store.get(session.session_id)
        assert first == second
        assert first is not second


class TestJsonFileSessionStore:
    """File store specifics."""

    def test_unreadable_file_is_missing(self, tmp_path):
        store = JsonFileSessionStore(tmp_path)
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        assert store.get("broken") is None

    def test_survives_new_instance(self, tmp_path):
        session = JsonFileSessionStore(tmp_path).create()
        assert JsonFileSessionStore(tmp_path).get(session.session_id) == session

    def test_rejects_path_like_ids(self, tmp_path):
        store = JsonFileSessionStore(tmp_path)
        assert store.get("../escape") is None
        with pytest.raises(ValueError):
            store.put("../escape", new_session())

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileSessionStore(tmp_path)
        store.create()
        assert not list(tmp_path.glob("*.tmp"))

    def test_clear(self, tmp_path):
        store = JsonFileSessionStore(tmp_path)
        store.create()
        store.create()
        store.clear()
        assert store.list_ids() == []


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_and_get(self, manager):
        session = manager.create_session()
        assert manager.get_session(session.session_id) == session
        assert manager.list_sessions() == [session.session_id]

    def test_unknown_session(self, manager):
        with pytest.raises(SessionNotFound) as exc_info:
            manager.get_session("missing")
        assert exc_info.value.session_id == "missing"

    def test_perform_action_persists(self, manager):
        session = manager.create_session()
        result = manager.perform_action(session.session_id, "sleep", draw=NO_EVENT_DRAW)

        stored = manager.get_session(session.session_id)
        assert stored == result.session
        assert stored.stats.health == 100
        assert stored.day == 2

    def test_perform_action_unknown_session(self, manager):
        with pytest.raises(SessionNotFound):
            manager.perform_action("missing", "sleep")

    def test_unknown_action_leaves_session(self, manager):
        session = manager.create_session()
        with pytest.raises(UnknownAction):
            manager.perform_action(session.session_id, "procrastinate")
        assert manager.get_session(session.session_id) == session

    def test_finished_session_not_rewritten(self, manager):
        session = manager.create_session()
        finished = replace(session, is_graduated=True)
        manager.store.put(session.session_id, finished)

        result = manager.perform_action(session.session_id, "procrastinate")
        assert result.was_noop
        assert manager.get_session(session.session_id) == finished

    def test_end_session(self, manager):
        session = manager.create_session()
        assert manager.end_session(session.session_id)
        assert not manager.end_session(session.session_id)
        with pytest.raises(SessionNotFound):
            manager.get_session(session.session_id)

    def test_concurrent_turns_serialized(self, manager):
        """Every turn lands; none is lost to an interleaved write."""
        session = manager.create_session()

        def play():
            for _ in range(10):
                manager.perform_action(session.session_id, "eatRamen", draw=NO_EVENT_DRAW)

        threads = [threading.Thread(target=play) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stored = manager.get_session(session.session_id)
        assert stored.total_days == 40
        assert stored.counters.ramen == 40
        assert manager._locks == {}

    def test_unknown_ids_leave_no_locks(self, manager):
        for i in range(100):
            with pytest.raises(SessionNotFound):
                manager.perform_action(f"missing-{i}", "sleep")
        assert manager._locks == {}

    def test_locks_released_after_turns(self, manager):
        session = manager.create_session()
        manager.perform_action(session.session_id, "sleep", draw=NO_EVENT_DRAW)
        with pytest.raises(UnknownAction):
            manager.perform_action(session.session_id, "procrastinate")
        manager.end_session(session.session_id)
        assert manager._locks == {}
