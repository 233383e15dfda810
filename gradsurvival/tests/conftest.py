"""
Pytest fixtures for Grad School Survival tests.
"""

import itertools
import random
from dataclasses import replace

import pytest

from ..catalog import GameRules, create_grad_school_rules
from ..engine_core.event_resolver import EventResolver
from ..engine_core.state import GameSession, new_session
from ..engine_core.stats import StatVector
from ..engine_core.turn_processor import TurnProcessor

# Past the total event mass of the built-in catalog, so no event fires.
NO_EVENT_DRAW = 0.99

FIXED_TIMESTAMP = 1_700_000_000.0


@pytest.fixture
def rules() -> GameRules:
    """The built-in grad school rules."""
    return create_grad_school_rules()


@pytest.fixture
def resolver(rules: GameRules) -> EventResolver:
    """Resolver with a seeded rng, a frozen clock and sequential ids."""
    counter = itertools.count(1)
    return EventResolver(
        events=rules.events,
        rng=random.Random(1234),
        clock=lambda: FIXED_TIMESTAMP,
        id_factory=lambda: f"evt-{next(counter)}",
    )


@pytest.fixture
def processor(rules: GameRules, resolver: EventResolver) -> TurnProcessor:
    """Turn processor wired to the deterministic resolver."""
    return TurnProcessor(rules=rules, resolver=resolver)


@pytest.fixture
def fresh_session() -> GameSession:
    """A new session with a fixed id."""
    return new_session("test-session")


@pytest.fixture
def make_session(fresh_session: GameSession):
    """Factory for sessions with some stats or calendar fields overridden."""

    def _make(day: int = 1, semester: int = 1, **stats) -> GameSession:
        base = fresh_session.stats
        values = {
            "health": base.health,
            "mental": base.mental,
            "research": base.research,
            "money": base.money,
            "advisor_favor": base.advisor_favor,
        }
        values.update(stats)
        return replace(fresh_session, stats=StatVector(**values), day=day, semester=semester)

    return _make
