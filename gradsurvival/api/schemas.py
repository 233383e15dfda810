"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the web client and the engine.
Field names are snake_case in Python and camelCase on the wire, matching
GameSession.to_dict().

Error Codes:
- SESSION_NOT_FOUND: No game is stored under the id
- UNKNOWN_ACTION: The action id is not in the action catalog
- VALIDATION_ERROR: The request body is malformed
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GRADUATED = "graduated"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class StatsInfo(WireModel):
    """The five stats."""
    health: int = Field(ge=0, le=100)
    mental: int = Field(ge=0, le=100)
    research: int = Field(ge=0, le=100)
    money: int = Field(ge=0, le=1_000_000)
    advisor_favor: int = Field(ge=0, le=100)


class CountersInfo(WireModel):
    """End-of-game tallies."""
    coffee: int = 0
    ramen: int = 0
    all_nighter: int = 0


class GameEventInfo(WireModel):
    """A random event occurrence."""
    id: str
    event_id: str
    title: str
    description: str
    effects: dict[str, int] = Field(default_factory=dict)
    timestamp: float
    is_positive: bool


class ActionInfo(WireModel):
    """An entry of the action catalog."""
    id: str
    name: str
    description: str
    effects: dict[str, int] = Field(default_factory=dict)
    side_effect: Optional[str] = Field(None, description="Counter this action bumps")


# =============================================================================
# Request Models
# =============================================================================

class PerformActionRequest(WireModel):
    """Request to play one turn."""
    game_id: str = Field(..., min_length=1, description="Session id")
    action: str = Field(..., min_length=1, description="Action id, e.g. writePaper")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(WireModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(WireModel):
    """Complete session state for display."""
    id: str
    stats: StatsInfo
    day: int = Field(ge=1, le=30)
    semester: int = Field(ge=1)
    total_days: int = Field(ge=0)
    is_game_over: bool = False
    game_over_reason: Optional[str] = None
    is_graduated: bool = False
    event_log: list[GameEventInfo] = Field(default_factory=list)
    last_action: Optional[str] = None
    counters: CountersInfo = Field(default_factory=CountersInfo)
    status: SessionStatus = SessionStatus.ACTIVE


class ActionResponse(WireModel):
    """Response after playing a turn."""
    game_state: GameStateResponse
    event: Optional[GameEventInfo] = None
    changes: dict[str, int] = Field(
        default_factory=dict, description="Merged stat deltas applied this turn"
    )


class ActionListResponse(WireModel):
    """The action catalog in display order."""
    actions: list[ActionInfo]
    count: int


class GameSummaryResponse(WireModel):
    """End screen numbers."""
    game_id: str
    outcome: SessionStatus
    reason: Optional[str] = None
    message: Optional[str] = None
    semester: int
    total_days: int
    coffee: int = 0
    ramen: int = 0
    all_nighter: int = 0
    final_stats: StatsInfo
    stat_levels: dict[str, str] = Field(
        default_factory=dict, description="critical, warning or normal per stat"
    )
    recent_events: list[GameEventInfo] = Field(
        default_factory=list, description="Newest first"
    )


class EndSessionResponse(WireModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(WireModel):
    """Health check response."""
    status: str
    service: str
    version: str
