"""Duration adjustment for dayweaver.

Decides how long a suggestion runs in a given amount of free time, and how several
suggestions competing for one gap share it. Every suggestion lives between its base
duration (floor) and its ask duration (ceiling); the task type decides whether it
gives up minutes to make room for others.
"""

from enum import Enum
from typing import List, Optional, Tuple
from dayweaver.models.suggestion import Suggestion, TaskType
from dayweaver.models.constants import DEFAULT_MANDATORY_THRESHOLD
from dayweaver.engine.priority import NeedTier, get_need_tier


class ShrinkRule(str, Enum):
    """How a task type behaves when a gap is crowded."""
    FLEXIBLE = "flexible"  # shrinks toward base alongside its gap neighbours
    RIGID = "rigid"  # keeps what it got at its turn; only truncated when forced


_SHRINK_RULES = {
    TaskType.DEADLINE: ShrinkRule.FLEXIBLE,
    TaskType.BACKLOG: ShrinkRule.FLEXIBLE,
    TaskType.ROUTINE: ShrinkRule.RIGID,
}

_GROWTH_ORDER = (NeedTier.MANDATORY, NeedTier.HIGH, NeedTier.NORMAL)


def get_shrink_rule(task_type: TaskType) -> ShrinkRule:
    """Get the shrink rule for a task type.

    Raises:
        ValueError: If the task type is not a known TaskType
    """
    return _SHRINK_RULES[TaskType(task_type)]


def duration_bounds(suggestion: Suggestion) -> Tuple[int, int]:
    """Return (floor, ask) for a suggestion.

    A base duration above the ask is capped at the ask; a non-positive base means the
    suggestion cannot shrink at all.
    """
    ask = suggestion.duration
    base = suggestion.base_duration
    if base <= 0 or base > ask:
        base = ask
    return base, ask


def fit_duration(suggestion: Suggestion, available_minutes: int) -> Optional[int]:
    """Compute the duration to allocate for a suggestion in the available time.

    - available >= ask: the ask duration (never more, however large the gap)
    - base <= available < ask: shrink to the available time
    - available < base: cannot place

    Args:
        suggestion: Suggestion to fit
        available_minutes: Free minutes left in the gap

    Returns:
        Duration in minutes, or None if the suggestion cannot fit even at its base
    """
    floor, ask = duration_bounds(suggestion)
    if ask <= 0 or available_minutes < floor:
        return None
    return min(ask, available_minutes)


def select_floors(
    suggestions: List[Suggestion],
    capacity: int,
    shrink_rigid: bool = False,
) -> Optional[List[int]]:
    """Compute the minimum minutes each suggestion needs in a shared gap.

    Suggestions are taken in the given (priority) order. Flexible suggestions need
    only their base duration. Rigid ones claim as much of their ask as is left at
    their turn, but at least their base. With ``shrink_rigid`` every suggestion,
    rigid or not, needs only its base; mandatory suggestions are packed this way so
    a routine ranked first cannot crowd out the ones after it.

    Args:
        suggestions: Suggestions competing for the gap, highest priority first
        capacity: Free minutes in the gap
        shrink_rigid: Let rigid suggestions drop to their base as well

    Returns:
        Floor per suggestion, or None if they cannot all fit together
    """
    floors = []
    used = 0

    for suggestion in suggestions:
        base, ask = duration_bounds(suggestion)
        if ask <= 0:
            return None

        if not shrink_rigid and get_shrink_rule(suggestion.type) == ShrinkRule.RIGID:
            floor = min(ask, capacity - used)
        else:
            floor = base

        if floor < base or used + floor > capacity:
            return None

        floors.append(floor)
        used += floor

    return floors


def allocate_durations(
    suggestions: List[Suggestion],
    capacity: int,
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    shrink_rigid: bool = False,
) -> Optional[List[int]]:
    """Share a gap between several suggestions.

    Everyone starts at their floor (see select_floors). Spare minutes then go out
    tier by tier (mandatory, high, normal). Inside a tier, rigid suggestions are
    topped up first; flexible ones split the rest in proportion to how far each is
    from its ask. Nobody goes past their ask.

    Args:
        suggestions: Suggestions in the gap, highest priority first
        capacity: Free minutes in the gap
        mandatory_threshold: Need at or above which a suggestion is mandatory
        shrink_rigid: Start rigid suggestions at their base too (see select_floors)

    Returns:
        Duration per suggestion (same order), or None if the floors do not fit
    """
    floors = select_floors(suggestions, capacity, shrink_rigid)
    if floors is None:
        return None

    allocations = list(floors)
    remaining = capacity - sum(allocations)

    for tier in _GROWTH_ORDER:
        if remaining <= 0:
            break

        members = [
            i for i, s in enumerate(suggestions)
            if get_need_tier(s, mandatory_threshold) == tier
        ]

        # Rigid suggestions get back to their ask before flexible ones grow
        for i in members:
            if get_shrink_rule(suggestions[i].type) != ShrinkRule.RIGID:
                continue
            want = suggestions[i].duration - allocations[i]
            extra = min(max(want, 0), remaining)
            allocations[i] += extra
            remaining -= extra

        flexible = [i for i in members if get_shrink_rule(suggestions[i].type) == ShrinkRule.FLEXIBLE]
        wants = {i: max(suggestions[i].duration - allocations[i], 0) for i in flexible}
        total_want = sum(wants.values())
        if total_want <= 0 or remaining <= 0:
            continue

        to_distribute = min(remaining, total_want)
        given = 0
        for i in flexible:
            extra = wants[i] * to_distribute // total_want
            allocations[i] += extra
            given += extra

        # Rounding leftovers go out in priority order
        leftover = to_distribute - given
        for i in flexible:
            if leftover <= 0:
                break
            extra = min(suggestions[i].duration - allocations[i], leftover)
            if extra > 0:
                allocations[i] += extra
                leftover -= extra

        remaining -= to_distribute

    return allocations
