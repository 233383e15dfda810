"""
API Module - Web client interface.

Exposes the engine via REST API. The web client:
1. Creates a game
2. Plays one action per turn
3. Shows the random event and stat changes each turn returns
4. Switches to an end screen once the game is over

Games are stored by the session manager; the store is in memory unless
GRADSURVIVAL_STORE_DIR points at a directory.
"""

from .schemas import (
    # Requests
    PerformActionRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    ActionListResponse,
    GameSummaryResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    StatsInfo,
    CountersInfo,
    GameEventInfo,
    ActionInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService

__all__ = [
    # Requests
    "PerformActionRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "ActionListResponse",
    "GameSummaryResponse",
    "EndSessionResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "StatsInfo",
    "CountersInfo",
    "GameEventInfo",
    "ActionInfo",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
]
