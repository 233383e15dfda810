"""
Session Module - Stores game sessions and serializes turns on them.

A session represents one play-through:
- Created when the player starts a game
- Loaded, played and written back once per turn
- Frozen when the student graduates or drops out
- Deleted when the player resets

Stores are last-write-wins. The manager serializes turns per session id.
"""

from .store import SessionStore, InMemorySessionStore, JsonFileSessionStore
from .manager import SessionManager

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "JsonFileSessionStore",
    "SessionManager",
]
