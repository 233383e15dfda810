"""
Session Manager - Creates sessions and plays turns against a store.

LIFECYCLE:
1. Player starts a game -> fresh session stored under a new id
2. Each turn:
   - Session loaded from the store
   - Turn processor plays the action
   - Result written back (last write wins)
3. Game ends -> session frozen, further turns are no-ops
4. Player resets -> session deleted from the store

CONCURRENCY:
- The turn processor assumes one in-flight turn per session
- The manager holds one lock per session id around load/play/store
- Different sessions never wait on each other
- A lock entry exists only while some call holds or waits on it
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator
import logging
import threading

from ..engine_core.action import TurnResult
from ..engine_core.errors import SessionNotFound, UnknownAction
from ..engine_core.state import GameSession
from ..engine_core.turn_processor import TurnProcessor
from .store import SessionStore, InMemorySessionStore

logger = logging.getLogger(__name__)


@dataclass
class _SessionLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions in the store
    - Serialize turns per session id
    - Delete sessions on reset
    """

    def __init__(
        self,
        store: SessionStore | None = None,
        processor: TurnProcessor | None = None,
    ):
        self.store = store or InMemorySessionStore()
        self.processor = processor or TurnProcessor()
        self._locks: dict[str, _SessionLock] = {}
        self._locks_guard = threading.Lock()

    def create_session(self) -> GameSession:
        """Create and store a new session."""
        session = self.store.create()
        logger.info("Created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> GameSession:
        """
        Get a session by ID.

        Raises SessionNotFound if the store has no such session.
        """
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def perform_action(
        self,
        session_id: str,
        action_id: str,
        draw: float | None = None,
    ) -> TurnResult:
        """
        Play one turn on a stored session.

        Raises SessionNotFound or UnknownAction; the stored session is
        untouched in both cases.
        """
        with self._lock_for(session_id):
            session = self.get_session(session_id)
            try:
                result = self.processor.perform_turn(session, action_id, draw=draw)
            except UnknownAction:
                logger.warning("Rejected unknown action %r for session %s", action_id, session_id)
                raise

            if result.session is not session:
                self.store.put(session_id, result.session)
            return result

    def end_session(self, session_id: str) -> bool:
        """
        Delete a session from the store.

        Returns whether a session was removed.
        """
        with self._lock_for(session_id):
            removed = self.store.delete(session_id)
        if removed:
            logger.info("Deleted session %s", session_id)
        return removed

    def list_sessions(self) -> list[str]:
        """List IDs of stored sessions."""
        return self.store.list_ids()

    @contextmanager
    def _lock_for(self, session_id: str) -> Iterator[None]:
        """Hold the session's lock, dropping the entry once nobody needs it."""
        with self._locks_guard:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = self._locks[session_id] = _SessionLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[session_id]
