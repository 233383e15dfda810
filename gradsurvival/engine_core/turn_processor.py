"""
Turn Processor - Applies one action to a session.

The turn processor is the single point of session change.
All turns must go through perform_turn().

Turn order:
1. Terminal sessions are returned unchanged (no-op, not an error)
2. Look up the action (unknown id -> UnknownAction)
3. Start the delta accumulator from the action's effects, bump counters
4. Resolve at most one random event and merge its effects
5. Apply the merged deltas once, clamping every stat
6. Advance the calendar
7. Graduation check
8. Loss check, first match wins: health, mental, advisor, money
9. Record the last action

Design principles:
- Pure function of (session, action id, draw) -> TurnResult
- The input session is never mutated
- No I/O, no blocking, constant work per turn
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Callable, TYPE_CHECKING
import logging
import random
import time

from .action import TurnResult
from .event_resolver import EventResolver, new_occurrence_id
from .state import DAYS_PER_SEMESTER, GameSession, LossReason
from .stats import StatKey, StatVector, merge_deltas

if TYPE_CHECKING:
    from ..catalog.rules import GameRules

logger = logging.getLogger(__name__)

# Checked in order; only the first exhausted stat is recorded.
LOSS_CHECKS: tuple[tuple[StatKey, LossReason], ...] = (
    (StatKey.HEALTH, LossReason.HEALTH),
    (StatKey.MENTAL, LossReason.MENTAL),
    (StatKey.ADVISOR_FAVOR, LossReason.ADVISOR),
    (StatKey.MONEY, LossReason.MONEY),
)

GRADUATION_RESEARCH = 100


def advance_calendar(day: int, semester: int, total_days: int) -> tuple[int, int, int]:
    """Move one day forward, rolling over into the next semester after day 30."""
    day += 1
    total_days += 1
    if day > DAYS_PER_SEMESTER:
        day = 1
        semester += 1
    return day, semester, total_days


def check_loss(stats: StatVector) -> LossReason | None:
    """Return the first exhausted stat's loss reason, if any."""
    for stat, reason in LOSS_CHECKS:
        if stats.get(stat) <= 0:
            return reason
    return None


@dataclass
class TurnProcessor:
    """
    Turn processor applies actions to sessions.

    Stateless apart from the injected event resolver.
    Rules provide the action and event tables. Without an explicit
    resolver, one is built from rng, clock and id_factory.
    """
    rules: GameRules | None = None
    resolver: EventResolver | None = None
    rng: random.Random | None = field(default=None, repr=False)
    clock: Callable[[], float] = field(default=time.time, repr=False)
    id_factory: Callable[[], str] = field(default=new_occurrence_id, repr=False)

    def __post_init__(self):
        if self.rules is None:
            from ..catalog.rules import create_grad_school_rules
            self.rules = create_grad_school_rules()
        if self.resolver is None:
            self.resolver = EventResolver(
                events=self.rules.events,
                rng=self.rng or random.Random(),
                clock=self.clock,
                id_factory=self.id_factory,
            )

    def perform_turn(
        self,
        session: GameSession,
        action_id: str,
        draw: float | None = None,
    ) -> TurnResult:
        """
        Play one turn.

        Returns TurnResult with the new session, the event (if any) and
        the merged deltas. Raises UnknownAction for ids not in the catalog.
        """
        if session.is_terminal:
            logger.debug("Session %s is finished, ignoring %s", session.session_id, action_id)
            return TurnResult(session=session)

        action = self.rules.actions.get(action_id)

        deltas = merge_deltas({}, action.effects)
        counters = session.counters
        if action.side_effect is not None:
            counters = counters.increment(action.side_effect)

        event_log = session.event_log
        occurrence = None
        resolved = self.resolver.resolve(draw)
        if resolved is not None:
            definition, occurrence = resolved
            deltas = merge_deltas(deltas, definition.effects)
            event_log = event_log + (occurrence,)
            if definition.side_effect is not None:
                counters = counters.increment(definition.side_effect)

        stats = session.stats.apply_deltas(deltas)
        day, semester, total_days = advance_calendar(
            session.day, session.semester, session.total_days
        )

        is_graduated = stats.research >= GRADUATION_RESEARCH
        loss_reason = check_loss(stats)

        new_session = replace(
            session,
            stats=stats,
            day=day,
            semester=semester,
            total_days=total_days,
            is_graduated=is_graduated,
            is_game_over=loss_reason is not None,
            game_over_reason=loss_reason,
            event_log=event_log,
            last_action=action.id,
            counters=counters,
        )

        if new_session.is_terminal:
            logger.info(
                "Session %s finished on day %d: %s%s",
                session.session_id,
                total_days,
                new_session.status.value,
                f" ({loss_reason.value})" if loss_reason else "",
            )

        return TurnResult(session=new_session, event=occurrence, deltas=deltas)


def perform_turn(
    rules: GameRules,
    session: GameSession,
    action_id: str,
    draw: float | None = None,
    rng: random.Random | None = None,
    clock: Callable[[], float] = time.time,
    id_factory: Callable[[], str] = new_occurrence_id,
) -> TurnResult:
    """
    Convenience function to play one turn.

    Creates a TurnProcessor and plays the action.
    """
    processor = TurnProcessor(rules=rules, rng=rng, clock=clock, id_factory=id_factory)
    return processor.perform_turn(session, action_id, draw=draw)
