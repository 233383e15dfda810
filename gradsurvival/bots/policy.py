"""
Bot Policy - Interface for autoplay decision-making.

A BotPolicy looks at a session and picks the next action id.
Used by the simulate command to play many games unattended.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging
import random

from ..engine_core.action import ActionType
from ..engine_core.state import GameSession, TerminalStatus, new_session
from ..engine_core.stats import StatKey

if TYPE_CHECKING:
    from ..engine_core.turn_processor import TurnProcessor

logger = logging.getLogger(__name__)


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains the action to take and a short explanation for logs.
    """
    action_id: str
    explanation: str = ""


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(self, session: GameSession, action_ids: list[str]) -> BotDecision:
        """
        Select an action for the next turn.

        Args:
            session: Current session
            action_ids: Ids in the action catalog

        Returns:
            BotDecision with the selected action
        """

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, session: GameSession, action_ids: list[str]) -> BotDecision:
        if not action_ids:
            raise ValueError("No actions available")

        action_id = self.rng.choice(action_ids)
        return BotDecision(action_id=action_id, explanation="Random choice")


class CautiousPolicy(BotPolicy):
    """
    Cautious policy - tops up any stat that is running low, else writes.

    Stats are checked in the same order the engine checks for losses,
    so the most immediately fatal shortage is handled first.
    """

    RECOVERY_ACTIONS: dict[StatKey, ActionType] = {
        StatKey.HEALTH: ActionType.SLEEP,
        StatKey.MENTAL: ActionType.REST,
        StatKey.ADVISOR_FAVOR: ActionType.MEET_ADVISOR,
        StatKey.MONEY: ActionType.PART_TIME_JOB,
    }

    def __init__(self, thresholds: dict[StatKey, int] | None = None):
        self.thresholds = thresholds or {
            StatKey.HEALTH: 35,
            StatKey.MENTAL: 40,
            StatKey.ADVISOR_FAVOR: 30,
            StatKey.MONEY: 60_000,
        }

    def select_action(self, session: GameSession, action_ids: list[str]) -> BotDecision:
        for stat, action in self.RECOVERY_ACTIONS.items():
            value = session.stats.get(stat)
            if value < self.thresholds.get(stat, 0) and action.value in action_ids:
                return BotDecision(
                    action_id=action.value,
                    explanation=f"{stat.value} is low ({value})",
                )
        return BotDecision(action_id=ActionType.WRITE_PAPER.value, explanation="Stats are fine")


POLICIES = {
    "random": RandomPolicy,
    "cautious": CautiousPolicy,
}


@dataclass
class GameRecord:
    """Outcome of one autoplayed game."""
    session: GameSession
    turns: int
    actions: list[str] = field(default_factory=list)

    @property
    def outcome(self) -> TerminalStatus:
        return self.session.status


def run_game(
    policy: BotPolicy,
    processor: TurnProcessor,
    max_turns: int = 1000,
) -> GameRecord:
    """
    Play a fresh session until it ends or max_turns is reached.

    Returns the final session and the actions taken.
    """
    session = new_session()
    action_ids = processor.rules.actions.ids
    actions: list[str] = []

    turns = 0
    while not session.is_terminal and turns < max_turns:
        decision = policy.select_action(session, action_ids)
        session = processor.perform_turn(session, decision.action_id).session
        actions.append(decision.action_id)
        turns += 1

    logger.debug(
        "%s finished after %d turns: %s",
        policy.get_name(),
        turns,
        session.status.value,
    )
    return GameRecord(session=session, turns=turns, actions=actions)
