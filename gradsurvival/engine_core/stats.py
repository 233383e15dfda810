"""
Stat Vector - The five bounded resources describing a player's condition.

Every stat has a lower bound of 0. Money tops out at 1,000,000; everything
else at 100. All mutations go through apply_deltas(), which clamps, so a
StatVector can never hold an out-of-range value after a turn.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class StatKey(str, Enum):
    """Stat names, valued by their wire key."""
    HEALTH = "health"
    MENTAL = "mental"
    RESEARCH = "research"
    MONEY = "money"
    ADVISOR_FAVOR = "advisorFavor"

    @property
    def field_name(self) -> str:
        """Attribute name on StatVector."""
        return _FIELD_NAMES[self]


_FIELD_NAMES = {
    StatKey.HEALTH: "health",
    StatKey.MENTAL: "mental",
    StatKey.RESEARCH: "research",
    StatKey.MONEY: "money",
    StatKey.ADVISOR_FAVOR: "advisor_favor",
}

STAT_LOWER_BOUND = 0
STAT_UPPER_BOUNDS: dict[StatKey, int] = {
    StatKey.HEALTH: 100,
    StatKey.MENTAL: 100,
    StatKey.RESEARCH: 100,
    StatKey.MONEY: 1_000_000,
    StatKey.ADVISOR_FAVOR: 100,
}

# Delta maps are keyed by StatKey; plain wire strings are accepted on input.
Deltas = dict[StatKey, int]


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def upper_bound(key: StatKey | str) -> int:
    return STAT_UPPER_BOUNDS[StatKey(key)]


def frozen_deltas(deltas: Mapping[StatKey, int]) -> Mapping[StatKey, int]:
    """Read-only copy of a delta map, for catalog entries and logged events."""
    return MappingProxyType(dict(deltas))


@dataclass(frozen=True)
class StatVector:
    """
    Immutable five-field resource record.

    Construct through StatVector.initial() or from_dict(); use
    apply_deltas() to derive a changed copy.
    """
    health: int
    mental: int
    research: int
    money: int
    advisor_favor: int

    @classmethod
    def initial(cls) -> StatVector:
        """Stats every new session starts with."""
        return cls(
            health=80,
            mental=70,
            research=0,
            money=500_000,
            advisor_favor=50,
        )

    def get(self, key: StatKey | str) -> int:
        return getattr(self, StatKey(key).field_name)

    def apply_deltas(self, deltas: Mapping[StatKey | str, int | None]) -> StatVector:
        """
        Return a new vector with deltas added and each touched field clamped.

        Keys absent from deltas, or mapped to None, are left untouched.
        """
        changes = {}
        for key, delta in deltas.items():
            if delta is None:
                continue
            stat = StatKey(key)
            changes[stat.field_name] = clamp(
                self.get(stat) + delta,
                STAT_LOWER_BOUND,
                STAT_UPPER_BOUNDS[stat],
            )
        return replace(self, **changes)

    def in_bounds(self) -> bool:
        """Check every field lies within its bound."""
        return all(
            STAT_LOWER_BOUND <= self.get(stat) <= STAT_UPPER_BOUNDS[stat]
            for stat in StatKey
        )

    def to_dict(self) -> dict[str, int]:
        """Wire form, keyed by StatKey values."""
        return {stat.value: self.get(stat) for stat in StatKey}

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> StatVector:
        return cls(**{stat.field_name: int(data[stat.value]) for stat in StatKey})


def apply_deltas(stats: StatVector, deltas: Mapping[StatKey | str, int | None]) -> StatVector:
    """Functional form of StatVector.apply_deltas."""
    return stats.apply_deltas(deltas)


def merge_deltas(base: Mapping[StatKey, int], extra: Mapping[StatKey | str, int | None]) -> Deltas:
    """
    Additively merge two delta maps.

    Keys in either map appear in the result; shared keys are summed.
    """
    merged: Deltas = {StatKey(k): v for k, v in base.items()}
    for key, value in extra.items():
        if value is None:
            continue
        stat = StatKey(key)
        merged[stat] = merged.get(stat, 0) + value
    return merged


def deltas_to_dict(deltas: Mapping[StatKey, int]) -> dict[str, int]:
    """Wire form of a delta map."""
    return {StatKey(k).value: v for k, v in deltas.items()}
