"""
Engine errors.

UnknownAction is the only error the turn engine raises itself.
SessionNotFound belongs to the persistence side and is raised by the
session manager when a store has no entry for an id.
"""


class GameError(Exception):
    """Base class for game engine errors."""

    error_code = "GAME_ERROR"


class UnknownAction(GameError):
    """Raised when an action id is not in the action catalog."""

    error_code = "UNKNOWN_ACTION"

    def __init__(self, action_id: str):
        self.action_id = action_id
        super().__init__(f"Unknown action: {action_id!r}")


class SessionNotFound(GameError):
    """Raised when no session is stored under an id."""

    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")
