"""
Bots module - Autoplay policies.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy: Uniform random baseline
- CautiousPolicy: Recover low stats, otherwise write papers
- run_game: Play a fresh session to the end
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomPolicy,
    CautiousPolicy,
    POLICIES,
    GameRecord,
    run_game,
)

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "CautiousPolicy",
    "POLICIES",
    "GameRecord",
    "run_game",
]
