"""
Game Summary - Read-only views over a session for end screens and stat bars.

Nothing here changes a session; these are the numbers a presentation layer
shows once a run is over.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .state import GameEvent, GameSession, LossReason, TerminalStatus
from .stats import StatKey, StatVector, upper_bound

LOSS_MESSAGES: dict[LossReason, str] = {
    LossReason.HEALTH: "Your health gave out and you collapsed.",
    LossReason.MENTAL: "Your mental health broke down. You cannot keep doing research.",
    LossReason.ADVISOR: "Your advisor refuses to supervise you any longer.",
    LossReason.MONEY: "You ran out of money and cannot make a living.",
}

GRADUATION_MESSAGE = "Congratulations, you graduated!"

CRITICAL_RATIO = 0.2
WARNING_RATIO = 0.4


def stat_level(stat: StatKey | str, value: int) -> str:
    """Classify a stat value as critical, warning or normal."""
    ratio = value / upper_bound(stat)
    if ratio <= CRITICAL_RATIO:
        return "critical"
    if ratio <= WARNING_RATIO:
        return "warning"
    return "normal"


def stat_levels(stats: StatVector) -> dict[str, str]:
    return {stat.value: stat_level(stat, stats.get(stat)) for stat in StatKey}


def recent_events(session: GameSession, limit: int = 5) -> list[GameEvent]:
    """The newest events first, at most limit of them."""
    if limit <= 0:
        return []
    return list(reversed(session.event_log[-limit:]))


@dataclass
class GameSummary:
    """End-of-game statistics."""
    outcome: TerminalStatus
    reason: LossReason | None
    message: str | None
    semester: int
    total_days: int
    coffee: int
    ramen: int
    all_nighter: int
    final_stats: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
            "semester": self.semester,
            "totalDays": self.total_days,
            "coffee": self.coffee,
            "ramen": self.ramen,
            "allNighter": self.all_nighter,
            "finalStats": self.final_stats,
        }


def summarize(session: GameSession) -> GameSummary:
    """
    Build the end screen numbers for a session.

    Graduation takes precedence over a loss recorded in the same turn.
    """
    outcome = session.status
    reason = None
    message = None
    if outcome == TerminalStatus.GRADUATED:
        message = GRADUATION_MESSAGE
    elif outcome == TerminalStatus.GAME_OVER:
        reason = session.game_over_reason
        message = LOSS_MESSAGES.get(reason) if reason else None

    return GameSummary(
        outcome=outcome,
        reason=reason,
        message=message,
        semester=session.semester,
        total_days=session.total_days,
        coffee=session.counters.coffee,
        ramen=session.counters.ramen,
        all_nighter=session.counters.all_nighter,
        final_stats=session.stats.to_dict(),
    )
