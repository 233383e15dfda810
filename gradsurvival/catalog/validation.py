"""
Catalog Validation - Invariant checks for the action and event tables.

Validates that:
1. IDs are present and unique
2. Effect maps only name known stats
3. Event probabilities lie in (0, 1]
4. Event probabilities sum to at most 1
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.stats import StatKey
from .actions import ActionDefinition
from .events import RandomEventDefinition

# Float sums of decimal probabilities drift by a few ulps.
PROBABILITY_TOLERANCE = 1e-9


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s): {errors}")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalogs(
    actions: list[ActionDefinition],
    events: list[RandomEventDefinition],
) -> ValidationResult:
    """
    Validate action and event definitions.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    errors.extend(_validate_ids([a.id for a in actions], "Action"))
    errors.extend(_validate_ids([e.id for e in events], "Event"))

    for action in actions:
        if not action.name:
            errors.append(f"Action '{action.id}' has empty name")
        errors.extend(_validate_effects(action.effects, f"Action '{action.id}'"))
        if not action.effects:
            warnings.append(f"Action '{action.id}' has no effects")

    total = 0.0
    for event in events:
        errors.extend(_validate_effects(event.effects, f"Event '{event.id}'"))
        if not 0 < event.probability <= 1:
            errors.append(
                f"Event '{event.id}' probability {event.probability} is outside (0, 1]"
            )
        total += event.probability

    if total > 1 + PROBABILITY_TOLERANCE:
        errors.append(f"Event probabilities sum to {total:.4f}, which exceeds 1")

    if not events:
        warnings.append("No events defined - every turn will be quiet")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_ids(ids: list[str], kind: str) -> list[str]:
    errors = []
    seen = set()
    for item_id in ids:
        if not item_id:
            errors.append(f"{kind} has empty ID")
        elif item_id in seen:
            errors.append(f"Duplicate {kind.lower()} ID '{item_id}'")
        seen.add(item_id)
    return errors


def _validate_effects(effects: dict, owner: str) -> list[str]:
    errors = []
    valid_keys = {stat.value for stat in StatKey}
    for key, delta in effects.items():
        if key not in valid_keys:
            errors.append(f"{owner} references unknown stat '{key}'")
        if not isinstance(delta, int):
            errors.append(f"{owner} has non-integer delta for '{key}'")
    return errors
