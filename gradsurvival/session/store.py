"""
Session Store - Persistence for game sessions, keyed by session id.

Two stores:
- InMemorySessionStore: dict-backed, process lifetime only
- JsonFileSessionStore: one JSON file per session on local disk

Design decisions:
- Sessions are stored in their wire form, so a stored value never
  aliases a caller's object
- Last write wins; no transactions or versioning
- An unreadable file is treated as a missing session
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
import json
import logging
import os
import tempfile

from ..engine_core.state import GameSession, new_session

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Interface the session manager persists through."""

    def create(self) -> GameSession:
        """Create, store and return a fresh session."""
        session = new_session()
        self.put(session.session_id, session)
        return session

    @abstractmethod
    def get(self, session_id: str) -> GameSession | None:
        """Load a session, or None if nothing is stored under the id."""

    @abstractmethod
    def put(self, session_id: str, session: GameSession) -> None:
        """Store a session, replacing whatever was there."""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns whether one existed."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        """IDs of all stored sessions."""


class InMemorySessionStore(SessionStore):
    """
    Dict-backed store.

    No persistence - sessions live for the lifetime of the process.
    """

    def __init__(self):
        self._sessions: dict[str, dict[str, Any]] = {}

    def get(self, session_id: str) -> GameSession | None:
        data = self._sessions.get(session_id)
        if data is None:
            return None
        return GameSession.from_dict(data)

    def put(self, session_id: str, session: GameSession) -> None:
        self._sessions[session_id] = session.to_dict()

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def list_ids(self) -> list[str]:
        return list(self._sessions)


class JsonFileSessionStore(SessionStore):
    """
    File-based store, one <session_id>.json per session.

    Usage:
        store = JsonFileSessionStore(store_dir="~/.gradsurvival/sessions")
        session = store.create()
        store.put(session.session_id, updated)
    """

    def __init__(self, store_dir: str | Path | None = None):
        if store_dir is None:
            store_dir = Path.home() / ".gradsurvival" / "sessions"
        self.store_dir = Path(store_dir).expanduser()

        # Ensure store directory exists
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def get(self, session_id: str) -> GameSession | None:
        path = self._get_path(session_id)
        if path is None or not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return GameSession.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Unreadable session file %s: %s", path, e)
            return None

    def put(self, session_id: str, session: GameSession) -> None:
        path = self._get_path(session_id)
        if path is None:
            raise ValueError(f"Invalid session id: {session_id!r}")

        # Write to a temp file and swap it in so readers never see half a file
        fd, tmp_path = tempfile.mkstemp(dir=self.store_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(session.to_dict(), f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def delete(self, session_id: str) -> bool:
        path = self._get_path(session_id)
        if path is None or not path.exists():
            return False
        path.unlink(missing_ok=True)
        return True

    def list_ids(self) -> list[str]:
        if not self.store_dir.exists():
            return []
        return [f.stem for f in self.store_dir.glob("*.json")]

    def clear(self):
        """Remove every stored session."""
        for session_id in self.list_ids():
            self.delete(session_id)

    def _get_path(self, session_id: str) -> Path | None:
        """
        Get file path for a session.

        Ids that could escape the store directory map to no path.
        """
        if not session_id or "/" in session_id or "\\" in session_id or session_id.startswith("."):
            return None
        return self.store_dir / f"{session_id}.json"
