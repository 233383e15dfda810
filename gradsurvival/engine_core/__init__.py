"""
Engine Core - Deterministic turn processing for grad school survival.

The engine is the runtime that:
1. Holds the StatVector and its clamp rule
2. Creates GameSessions
3. Resolves random events with an injected random source
4. Applies actions via the turn processor
5. Summarizes finished sessions
"""

from .errors import GameError, UnknownAction, SessionNotFound
from .stats import StatKey, StatVector, apply_deltas, merge_deltas
from .state import (
    GameSession,
    GameEvent,
    Counters,
    CounterKey,
    EventPolarity,
    LossReason,
    TerminalStatus,
    new_session,
)
from .action import ActionType, TurnResult
from .event_resolver import EventResolver, select_event
from .turn_processor import TurnProcessor, perform_turn
from .summary import GameSummary, summarize, stat_level, recent_events

__all__ = [
    "GameError",
    "UnknownAction",
    "SessionNotFound",
    "StatKey",
    "StatVector",
    "apply_deltas",
    "merge_deltas",
    "GameSession",
    "GameEvent",
    "Counters",
    "CounterKey",
    "EventPolarity",
    "LossReason",
    "TerminalStatus",
    "new_session",
    "ActionType",
    "TurnResult",
    "EventResolver",
    "select_event",
    "TurnProcessor",
    "perform_turn",
    "GameSummary",
    "summarize",
    "stat_level",
    "recent_events",
]
