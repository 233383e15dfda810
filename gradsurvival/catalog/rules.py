"""
Game Rules - The action and event catalogs bundled for the engine.

The engine never imports the catalogs directly; it receives a GameRules
value, so tests can run turns against custom tables.
"""

from __future__ import annotations
from dataclasses import dataclass

from .actions import ActionCatalog, ActionDefinition, GRAD_SCHOOL_ACTIONS
from .events import EventCatalog, RandomEventDefinition, GRAD_SCHOOL_EVENTS
from .validation import validate_catalogs, CatalogValidationError


@dataclass(frozen=True)
class GameRules:
    """Fixed tables a turn is played against."""
    actions: ActionCatalog
    events: EventCatalog


def build_rules(
    actions: list[ActionDefinition],
    events: list[RandomEventDefinition],
) -> GameRules:
    """
    Validate definitions and bundle them into catalogs.

    Raises CatalogValidationError if any invariant is broken.
    """
    result = validate_catalogs(actions, events)
    if not result.valid:
        raise CatalogValidationError(result.errors)
    return GameRules(actions=ActionCatalog(actions), events=EventCatalog(events))


_GRAD_SCHOOL_RULES: GameRules | None = None


def create_grad_school_rules() -> GameRules:
    """The built-in grad school tables. Built and validated once."""
    global _GRAD_SCHOOL_RULES
    if _GRAD_SCHOOL_RULES is None:
        _GRAD_SCHOOL_RULES = build_rules(GRAD_SCHOOL_ACTIONS, GRAD_SCHOOL_EVENTS)
    return _GRAD_SCHOOL_RULES
