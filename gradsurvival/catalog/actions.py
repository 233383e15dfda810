"""
Action Catalog - The fixed table of player actions.

Ten actions, each with a literal effect map. Two of them also bump a
cosmetic counter: coffee and ramen.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from ..engine_core.action import ActionType
from ..engine_core.errors import UnknownAction
from ..engine_core.state import CounterKey
from ..engine_core.stats import StatKey, frozen_deltas


@dataclass(frozen=True)
class ActionDefinition:
    """
    A player action definition.

    Effects are signed deltas keyed by stat; stats not listed are untouched.
    """
    id: str
    name: str
    description: str
    effects: Mapping[StatKey, int] = field(default_factory=dict)
    side_effect: CounterKey | None = None

    def __post_init__(self):
        object.__setattr__(self, "effects", frozen_deltas(self.effects))


class ActionCatalog:
    """
    Ordered, id-keyed table of actions.

    Iteration follows declaration order. get() raises UnknownAction
    for ids that are not in the table.
    """

    def __init__(self, actions: list[ActionDefinition]):
        self._actions: dict[str, ActionDefinition] = {}
        for action in actions:
            self._actions[action.id] = action

    def get(self, action_id: str) -> ActionDefinition:
        """Look up an action by id."""
        try:
            return self._actions[action_id]
        except (KeyError, TypeError):
            raise UnknownAction(action_id) from None

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def __iter__(self) -> Iterator[ActionDefinition]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    @property
    def ids(self) -> list[str]:
        return list(self._actions)


# ============================================================================
# Research
# ============================================================================

READ_PAPERS = ActionDefinition(
    id=ActionType.READ_PAPERS.value,
    name="Read papers",
    description="Catch up on the latest papers and fold them into your research.",
    effects={StatKey.RESEARCH: 5, StatKey.MENTAL: -5, StatKey.HEALTH: -3},
)

EXPERIMENT = ActionDefinition(
    id=ActionType.EXPERIMENT.value,
    name="Run experiment",
    description="Spend the day in the lab running experiments.",
    effects={StatKey.RESEARCH: 10, StatKey.MENTAL: -8, StatKey.HEALTH: -5},
)

WRITE_PAPER = ActionDefinition(
    id=ActionType.WRITE_PAPER.value,
    name="Write paper",
    description="Turn your results into a paper.",
    effects={
        StatKey.RESEARCH: 15,
        StatKey.MENTAL: -15,
        StatKey.HEALTH: -8,
        StatKey.ADVISOR_FAVOR: 5,
    },
)

# ============================================================================
# Recovery
# ============================================================================

SLEEP = ActionDefinition(
    id=ActionType.SLEEP.value,
    name="Sleep",
    description="Get a full night of sleep and recover.",
    effects={StatKey.HEALTH: 25, StatKey.MENTAL: 10},
)

DRINK_COFFEE = ActionDefinition(
    id=ActionType.DRINK_COFFEE.value,
    name="Drink coffee",
    description="Caffeine keeps you going.",
    effects={StatKey.MENTAL: 8, StatKey.HEALTH: -3, StatKey.MONEY: -5000},
    side_effect=CounterKey.COFFEE,
)

EAT_RAMEN = ActionDefinition(
    id=ActionType.EAT_RAMEN.value,
    name="Eat ramen",
    description="A cheap meal.",
    effects={StatKey.HEALTH: 5, StatKey.MENTAL: 3, StatKey.MONEY: -3000},
    side_effect=CounterKey.RAMEN,
)

# ============================================================================
# Advisor and money
# ============================================================================

MEET_ADVISOR = ActionDefinition(
    id=ActionType.MEET_ADVISOR.value,
    name="Meet advisor",
    description="Report your progress to your advisor.",
    effects={StatKey.ADVISOR_FAVOR: 10, StatKey.MENTAL: -10, StatKey.RESEARCH: 3},
)

PART_TIME_JOB = ActionDefinition(
    id=ActionType.PART_TIME_JOB.value,
    name="Part-time job",
    description="Work a shift to pay the bills.",
    effects={
        StatKey.MONEY: 50000,
        StatKey.HEALTH: -10,
        StatKey.MENTAL: -5,
        StatKey.ADVISOR_FAVOR: -5,
    },
)

REST = ActionDefinition(
    id=ActionType.REST.value,
    name="Rest",
    description="Take a break and recover your mental health.",
    effects={StatKey.MENTAL: 15, StatKey.HEALTH: 5, StatKey.ADVISOR_FAVOR: -3},
)

EXERCISE = ActionDefinition(
    id=ActionType.EXERCISE.value,
    name="Exercise",
    description="Work out for your health.",
    effects={StatKey.HEALTH: 15, StatKey.MENTAL: 5, StatKey.MONEY: -10000},
)


GRAD_SCHOOL_ACTIONS: list[ActionDefinition] = [
    READ_PAPERS,
    EXPERIMENT,
    WRITE_PAPER,
    SLEEP,
    DRINK_COFFEE,
    EAT_RAMEN,
    MEET_ADVISOR,
    PART_TIME_JOB,
    REST,
    EXERCISE,
]
