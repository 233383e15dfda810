"""
Action System - Action identifiers and turn results.

Actions represent the ten things a student can spend a day on.
Every state change flows through one action per turn.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import GameEvent, GameSession
from .stats import StatKey, deltas_to_dict


class ActionType(str, Enum):
    """Player actions, valued by their wire id."""
    READ_PAPERS = "readPapers"
    EXPERIMENT = "experiment"
    WRITE_PAPER = "writePaper"
    SLEEP = "sleep"
    DRINK_COFFEE = "drinkCoffee"
    EAT_RAMEN = "eatRamen"
    MEET_ADVISOR = "meetAdvisor"
    PART_TIME_JOB = "partTimeJob"
    REST = "rest"
    EXERCISE = "exercise"


@dataclass
class TurnResult:
    """
    Result of processing one turn.

    Contains:
    - The session after the turn (unchanged for terminal sessions)
    - The random event occurrence, if one fired
    - The merged per-stat deltas, for display as this turn's changes
    """
    session: GameSession
    event: GameEvent | None = None
    deltas: dict[StatKey, int] = field(default_factory=dict)

    @property
    def was_noop(self) -> bool:
        return not self.deltas and self.event is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "gameState": self.session.to_dict(),
            "event": self.event.to_dict() if self.event else None,
            "changes": deltas_to_dict(self.deltas),
        }
