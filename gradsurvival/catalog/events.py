"""
Event Catalog - The fixed table of weighted random events.

Order matters: the resolver walks the table accumulating probabilities
and the first entry whose running sum exceeds the draw wins. The sum of
all probabilities stays at or below 1; the remaining mass is a quiet day.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from ..engine_core.state import CounterKey, EventPolarity
from ..engine_core.stats import StatKey, frozen_deltas


@dataclass(frozen=True)
class RandomEventDefinition:
    """A random event definition. Occurrences are GameEvent instances."""
    id: str
    title: str
    description: str
    probability: float
    polarity: EventPolarity
    effects: Mapping[StatKey, int] = field(default_factory=dict)
    side_effect: CounterKey | None = None

    def __post_init__(self):
        object.__setattr__(self, "effects", frozen_deltas(self.effects))

    @property
    def is_positive(self) -> bool:
        return self.polarity == EventPolarity.POSITIVE


class EventCatalog:
    """Ordered, id-keyed table of random events."""

    def __init__(self, events: list[RandomEventDefinition]):
        self._events: dict[str, RandomEventDefinition] = {}
        for event in events:
            self._events[event.id] = event

    def get(self, event_id: str) -> RandomEventDefinition | None:
        return self._events.get(event_id)

    def __iter__(self) -> Iterator[RandomEventDefinition]:
        return iter(self._events.values())

    def __len__(self) -> int:
        return len(self._events)

    @property
    def total_probability(self) -> float:
        return sum(event.probability for event in self._events.values())


GRAD_SCHOOL_EVENTS: list[RandomEventDefinition] = [
    RandomEventDefinition(
        id="advisor_angry",
        title="Summoned by your advisor",
        description="Your advisor calls you in and loses their temper over your slow progress.",
        probability=0.05,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -20, StatKey.ADVISOR_FAVOR: -15},
    ),
    RandomEventDefinition(
        id="experiment_fail",
        title="Experiment failed",
        description="The experiment you spent days preparing failed completely.",
        probability=0.06,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -25, StatKey.RESEARCH: -10},
    ),
    RandomEventDefinition(
        id="paper_reject",
        title="Paper rejected",
        description="Your submission was rejected. The reviewer comments are brutal.",
        probability=0.04,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -30, StatKey.RESEARCH: -5, StatKey.ADVISOR_FAVOR: -10},
    ),
    RandomEventDefinition(
        id="sudden_meeting",
        title="Surprise meeting",
        description="A lab meeting was scheduled for this evening without warning.",
        probability=0.075,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -10, StatKey.HEALTH: -5},
    ),
    RandomEventDefinition(
        id="computer_crash",
        title="Computer crash",
        description="The lab computer died. Whatever you had not saved is gone.",
        probability=0.025,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -20, StatKey.RESEARCH: -8, StatKey.MONEY: -100000},
    ),
    RandomEventDefinition(
        id="senior_help",
        title="Help from a senior student",
        description="A kind senior student helps you with your research.",
        probability=0.05,
        polarity=EventPolarity.POSITIVE,
        effects={StatKey.RESEARCH: 10, StatKey.MENTAL: 10},
    ),
    RandomEventDefinition(
        id="scholarship",
        title="Scholarship paid",
        description="This month's scholarship just arrived.",
        probability=0.04,
        polarity=EventPolarity.POSITIVE,
        effects={StatKey.MONEY: 200000, StatKey.MENTAL: 15},
    ),
    RandomEventDefinition(
        id="advisor_praise",
        title="Praise from your advisor",
        description="Your advisor is pleased with your progress and says so.",
        probability=0.035,
        polarity=EventPolarity.POSITIVE,
        effects={StatKey.MENTAL: 25, StatKey.ADVISOR_FAVOR: 15},
    ),
    RandomEventDefinition(
        id="paper_accept",
        title="Paper accepted",
        description="Your paper was accepted at the conference. Congratulations!",
        probability=0.025,
        polarity=EventPolarity.POSITIVE,
        effects={StatKey.MENTAL: 30, StatKey.RESEARCH: 15, StatKey.ADVISOR_FAVOR: 20},
    ),
    RandomEventDefinition(
        id="free_food",
        title="Free food",
        description="You got a free meal at a seminar.",
        probability=0.06,
        polarity=EventPolarity.POSITIVE,
        effects={StatKey.HEALTH: 10, StatKey.MENTAL: 5, StatKey.MONEY: 10000},
    ),
    RandomEventDefinition(
        id="all_nighter",
        title="Forced all-nighter",
        description="Your advisor wants results by tomorrow. No sleep tonight.",
        probability=0.05,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.HEALTH: -20, StatKey.MENTAL: -15, StatKey.RESEARCH: 8},
        side_effect=CounterKey.ALL_NIGHTER,
    ),
    RandomEventDefinition(
        id="lab_mate_quit",
        title="Lab mate drops out",
        description="A classmate from your cohort announced they are dropping out. Tempting.",
        probability=0.03,
        polarity=EventPolarity.NEGATIVE,
        effects={StatKey.MENTAL: -15},
    ),
]
