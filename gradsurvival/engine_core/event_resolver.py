"""
Event Resolver - Selects at most one random event per turn.

Resolution uses a single uniform draw r in [0, 1) against the running sum
of probabilities, walking the catalog in its declared order:

    c = 0
    for definition in catalog:
        c += definition.probability
        if r < c: select definition, stop

A draw past the total mass selects nothing. Because there is one draw and
the walk stops at the first hit, no turn can produce two events.

The random source, the clock and the occurrence id factory are all
injected. Nothing here touches the module-level random generator.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterable, TYPE_CHECKING
import logging
import random
import time
import uuid

from .state import GameEvent

if TYPE_CHECKING:
    from ..catalog.events import RandomEventDefinition

logger = logging.getLogger(__name__)


def select_event(
    definitions: Iterable[RandomEventDefinition],
    draw: float,
) -> RandomEventDefinition | None:
    """
    Pick the first definition whose cumulative probability exceeds draw.

    The comparison is strict: a draw equal to a boundary falls through
    to the next definition.
    """
    cumulative = 0.0
    for definition in definitions:
        cumulative += definition.probability
        if draw < cumulative:
            return definition
    return None


def new_occurrence_id() -> str:
    return str(uuid.uuid4())


@dataclass
class EventResolver:
    """
    Draws against an event catalog and instantiates occurrences.

    Usage:
        resolver = EventResolver(events=rules.events, rng=random.Random(42))
        event = resolver.resolve()            # uses rng
        event = resolver.resolve(draw=0.99)   # explicit draw
    """
    events: Iterable[RandomEventDefinition]
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.time
    id_factory: Callable[[], str] = new_occurrence_id

    def draw(self) -> float:
        """Sample r in [0, 1) from the injected source."""
        return self.rng.random()

    def resolve(self, draw: float | None = None) -> tuple[RandomEventDefinition, GameEvent] | None:
        """
        Resolve this turn's event.

        Returns (definition, occurrence) or None for a quiet turn.
        """
        r = self.draw() if draw is None else draw
        definition = select_event(self.events, r)
        if definition is None:
            logger.debug("Draw %.4f selected no event", r)
            return None

        logger.debug("Draw %.4f selected event %s", r, definition.id)
        occurrence = GameEvent(
            occurrence_id=self.id_factory(),
            event_id=definition.id,
            title=definition.title,
            description=definition.description,
            effects=definition.effects,
            timestamp=self.clock(),
            polarity=definition.polarity,
        )
        return definition, occurrence
