"""Priority calculation and ranking for dayweaver.

Ranks suggestions by need + importance, breaking ties by ask duration.
This produces a deterministic ordering for scheduling.
"""

from enum import Enum
from typing import List, Tuple
from dayweaver.models.suggestion import Suggestion
from dayweaver.models.constants import (
    DEFAULT_MANDATORY_THRESHOLD,
    HIGH_NEED_THRESHOLD,
    NEED_TOLERANCE,
    PRIORITY_COMPONENT_CAP,
    PRIORITY_PRECISION,
)


class NeedTier(str, Enum):
    """Need band used when spare minutes are handed out."""
    MANDATORY = "mandatory"
    HIGH = "high"
    NORMAL = "normal"


def calculate_priority(suggestion: Suggestion) -> float:
    """Calculate the scalar priority of a suggestion.

    Priority is need + importance, each clamped to [0, PRIORITY_COMPONENT_CAP].
    The sum is rounded so that values like 0.8 + 0.1 and 0.9 compare equal.

    Args:
        suggestion: Suggestion to score

    Returns:
        Priority score (higher = more important)
    """
    need = min(max(suggestion.need, 0.0), PRIORITY_COMPONENT_CAP)
    importance = min(max(suggestion.importance, 0.0), PRIORITY_COMPONENT_CAP)
    return round(need + importance, PRIORITY_PRECISION)


def priority_key(suggestion: Suggestion) -> Tuple[float, int]:
    """Get sort key for a suggestion (higher sorts first).

    Primary: need + importance. Secondary: ask duration, so a longer task wins a tie
    against a shorter one with the same score. Being a tuple, the secondary term can
    never override a difference in the primary one.
    """
    return (calculate_priority(suggestion), suggestion.duration)


def sort_by_priority(suggestions: List[Suggestion]) -> List[Suggestion]:
    """Sort suggestions by priority, highest first.

    The sort is stable: suggestions with equal keys keep their input order.
    This function is deterministic - same inputs always produce same outputs.
    """
    return sorted(suggestions, key=priority_key, reverse=True)


def is_mandatory(suggestion: Suggestion, threshold: float = DEFAULT_MANDATORY_THRESHOLD) -> bool:
    """Check whether a suggestion belongs to the mandatory tier."""
    return suggestion.need >= threshold - NEED_TOLERANCE


def partition_suggestions(
    suggestions: List[Suggestion],
    threshold: float = DEFAULT_MANDATORY_THRESHOLD,
) -> Tuple[List[Suggestion], List[Suggestion]]:
    """Separate suggestions into mandatory and optional lists, preserving order.

    Returns:
        Tuple of (mandatory, optional)
    """
    mandatory = []
    optional = []

    for suggestion in suggestions:
        if is_mandatory(suggestion, threshold):
            mandatory.append(suggestion)
        else:
            optional.append(suggestion)

    return mandatory, optional


def get_need_tier(suggestion: Suggestion, threshold: float = DEFAULT_MANDATORY_THRESHOLD) -> NeedTier:
    """Get the need band of a suggestion."""
    if is_mandatory(suggestion, threshold):
        return NeedTier.MANDATORY
    if suggestion.need >= HIGH_NEED_THRESHOLD - NEED_TOLERANCE:
        return NeedTier.HIGH
    return NeedTier.NORMAL
