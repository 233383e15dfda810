"""
Catalog - The fixed game data.

This module contains:
- Action definitions (ten actions, two with counter side effects)
- Random event definitions (ordered, weighted)
- Catalog validation
- The built-in grad school rules bundle
"""

from .actions import ActionCatalog, ActionDefinition, GRAD_SCHOOL_ACTIONS
from .events import EventCatalog, RandomEventDefinition, GRAD_SCHOOL_EVENTS
from .validation import validate_catalogs, CatalogValidationError, ValidationResult
from .rules import GameRules, build_rules, create_grad_school_rules

__all__ = [
    "ActionCatalog",
    "ActionDefinition",
    "GRAD_SCHOOL_ACTIONS",
    "EventCatalog",
    "RandomEventDefinition",
    "GRAD_SCHOOL_EVENTS",
    "validate_catalogs",
    "CatalogValidationError",
    "ValidationResult",
    "GameRules",
    "build_rules",
    "create_grad_school_rules",
]
