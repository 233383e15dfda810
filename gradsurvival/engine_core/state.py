"""
Game State - The per-player session aggregate.

Design principles:
- Immutable: every turn produces a new GameSession from the prior one
- Serializable: to_dict()/from_dict() round-trip losslessly
- Append-only event log: occurrences are never mutated or removed
- Frozen once terminal: graduated or game over sessions never change
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping
import uuid

from .stats import StatKey, StatVector, frozen_deltas

DAYS_PER_SEMESTER = 30


class CounterKey(str, Enum):
    """Cosmetic counters kept for end-of-game statistics."""
    COFFEE = "coffee"
    RAMEN = "ramen"
    ALL_NIGHTER = "allNighter"


class EventPolarity(str, Enum):
    """Whether an event helps or hurts the player."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


class LossReason(str, Enum):
    """Why a session ended in game over. Values are the wire reason strings."""
    HEALTH = "health"
    MENTAL = "mental"
    ADVISOR = "advisor"
    MONEY = "money"


class TerminalStatus(str, Enum):
    """Lifecycle status of a session."""
    ACTIVE = "active"
    GRADUATED = "graduated"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Counters:
    """Action and event tallies. They never feed back into the simulation."""
    coffee: int = 0
    ramen: int = 0
    all_nighter: int = 0

    def increment(self, key: CounterKey) -> Counters:
        """Return new counters with one tally bumped."""
        name = _COUNTER_FIELDS[CounterKey(key)]
        return replace(self, **{name: getattr(self, name) + 1})

    def to_dict(self) -> dict[str, int]:
        return {key.value: getattr(self, name) for key, name in _COUNTER_FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Counters:
        return cls(**{
            name: int(data.get(key.value, 0))
            for key, name in _COUNTER_FIELDS.items()
        })


_COUNTER_FIELDS = {
    CounterKey.COFFEE: "coffee",
    CounterKey.RAMEN: "ramen",
    CounterKey.ALL_NIGHTER: "all_nighter",
}


@dataclass(frozen=True)
class GameEvent:
    """
    A concrete occurrence of a random event.

    Note: This is the occurrence, not the definition.
    The definition lives in the event catalog.
    """
    occurrence_id: str
    event_id: str  # References RandomEventDefinition.id
    title: str
    description: str
    effects: Mapping[StatKey, int]
    timestamp: float
    polarity: EventPolarity

    def __post_init__(self):
        object.__setattr__(self, "effects", frozen_deltas(self.effects))

    @property
    def is_positive(self) -> bool:
        return self.polarity == EventPolarity.POSITIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.occurrence_id,
            "eventId": self.event_id,
            "title": self.title,
            "description": self.description,
            "effects": {StatKey(k).value: v for k, v in self.effects.items()},
            "timestamp": self.timestamp,
            "isPositive": self.is_positive,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameEvent:
        return cls(
            occurrence_id=data["id"],
            event_id=data["eventId"],
            title=data["title"],
            description=data["description"],
            effects={StatKey(k): int(v) for k, v in data["effects"].items()},
            timestamp=data["timestamp"],
            polarity=EventPolarity.POSITIVE if data["isPositive"] else EventPolarity.NEGATIVE,
        )


@dataclass(frozen=True)
class GameSession:
    """
    Complete state of one play-through.

    This is the canonical value the turn processor operates on.
    All changes go through the turn processor, which returns a new session.
    """
    session_id: str
    stats: StatVector = field(default_factory=StatVector.initial)

    # Calendar
    day: int = 1
    semester: int = 1
    total_days: int = 0

    # Termination
    is_game_over: bool = False
    game_over_reason: LossReason | None = None
    is_graduated: bool = False

    # History
    event_log: tuple[GameEvent, ...] = ()
    last_action: str | None = None
    counters: Counters = field(default_factory=Counters)

    @property
    def is_terminal(self) -> bool:
        return self.is_graduated or self.is_game_over

    @property
    def terminal(self) -> TerminalStatus | None:
        """
        Terminal status, or None while the session is active.

        A single turn can set both flags; graduation takes precedence.
        """
        if self.is_graduated:
            return TerminalStatus.GRADUATED
        if self.is_game_over:
            return TerminalStatus.GAME_OVER
        return None

    @property
    def status(self) -> TerminalStatus:
        return self.terminal or TerminalStatus.ACTIVE

    def to_dict(self) -> dict[str, Any]:
        """Wire form of the session."""
        return {
            "id": self.session_id,
            "stats": self.stats.to_dict(),
            "day": self.day,
            "semester": self.semester,
            "totalDays": self.total_days,
            "isGameOver": self.is_game_over,
            "gameOverReason": self.game_over_reason.value if self.game_over_reason else None,
            "isGraduated": self.is_graduated,
            "eventLog": [event.to_dict() for event in self.event_log],
            "lastAction": self.last_action,
            "counters": self.counters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameSession:
        reason = data.get("gameOverReason")
        return cls(
            session_id=data["id"],
            stats=StatVector.from_dict(data["stats"]),
            day=int(data["day"]),
            semester=int(data["semester"]),
            total_days=int(data["totalDays"]),
            is_game_over=bool(data["isGameOver"]),
            game_over_reason=LossReason(reason) if reason else None,
            is_graduated=bool(data["isGraduated"]),
            event_log=tuple(GameEvent.from_dict(e) for e in data.get("eventLog", [])),
            last_action=data.get("lastAction"),
            counters=Counters.from_dict(data.get("counters", {})),
        )


def new_session(session_id: str | None = None) -> GameSession:
    """
    Create a fresh session with the starting stats and calendar.

    A uuid4 id is stamped unless one is given.
    """
    return GameSession(session_id=session_id or str(uuid.uuid4()))
