"""Legacy greedy scheduler.

Kept behind ``use_state_search=False``. Mandatory suggestions are placed first, then
a knapsack-selected subset of the optional ones. Each group is placed gap by gap in
the best order found by trying every permutation of small groups. Blocks never
overlap or overrun a gap, but nothing is optimized beyond that.
"""

import logging
from itertools import permutations
from typing import List, Tuple
from dayweaver.models.constants import (
    DEFAULT_MANDATORY_THRESHOLD,
    DEFAULT_PERMUTATION_LIMIT,
    KNAPSACK_RESOLUTION_MINUTES,
    ORDER_SCORE_WEIGHT,
)
from dayweaver.models.scheduled_block import ScheduledBlock
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.durations import allocate_durations, duration_bounds, select_floors
from dayweaver.engine.location_matching import can_use_gap
from dayweaver.engine.placement import GapSlot, lay_out
from dayweaver.engine.priority import calculate_priority, partition_suggestions

logger = logging.getLogger(__name__)


def knapsack_select(
    suggestions: List[Suggestion],
    capacity: int,
    resolution_minutes: int = KNAPSACK_RESOLUTION_MINUTES,
) -> List[Suggestion]:
    """Pick the subset of suggestions with the highest total priority that fits.

    0/1 knapsack over base durations (the least each suggestion can run with).

    Args:
        suggestions: Candidates, highest priority first
        capacity: Total free minutes
        resolution_minutes: Minutes per knapsack weight unit

    Returns:
        Chosen suggestions, in input order
    """
    if capacity <= 0 or not suggestions:
        return []

    limit = capacity // resolution_minutes
    weights = [max(1, round(duration_bounds(s)[0] / resolution_minutes)) for s in suggestions]
    values = [calculate_priority(s) for s in suggestions]

    best = [0.0] * (limit + 1)
    taken = [[False] * (limit + 1) for _ in suggestions]

    for i, (weight, value) in enumerate(zip(weights, values)):
        for w in range(limit, weight - 1, -1):
            candidate = best[w - weight] + value
            if candidate > best[w]:
                best[w] = candidate
                taken[i][w] = True

    chosen = set()
    w = limit
    for i in range(len(suggestions) - 1, -1, -1):
        if taken[i][w]:
            chosen.add(i)
            w -= weights[i]

    return [s for i, s in enumerate(suggestions) if i in chosen]


def _assign_to_gaps(
    order: List[Suggestion],
    slots: List[GapSlot],
    room: List[int],
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    shrink_rigid: bool = False,
) -> Tuple[List[List[Tuple[Suggestion, int]]], List[Suggestion]]:
    """Walk the gaps in order, letting the remaining suggestions compete for each.

    A suggestion joins a gap when its floor still fits next to the ones that joined
    before it (in ``order``); the gap is then shared with allocate_durations.
    Suggestions that join no gap are returned as dropped, in ``order``.
    """
    remaining = list(order)
    per_slot: List[List[Tuple[Suggestion, int]]] = []

    for j, slot in enumerate(slots):
        members: List[Suggestion] = []
        for suggestion in remaining:
            if not can_use_gap(suggestion, slot.gap):
                continue
            if select_floors(members + [suggestion], room[j], shrink_rigid) is None:
                continue
            members.append(suggestion)

        durations = (
            allocate_durations(members, room[j], mandatory_threshold, shrink_rigid)
            if members else []
        )
        per_slot.append(list(zip(members, durations)))
        taken = {s.id for s in members}
        remaining = [s for s in remaining if s.id not in taken]

    return per_slot, remaining


def evaluate_order(
    order: List[Suggestion],
    slots: List[GapSlot],
    room: List[int],
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    shrink_rigid: bool = False,
) -> Tuple[int, int]:
    """Score a placement order without touching the slots.

    Returns:
        Tuple of (suggestions placed, total minutes allocated)
    """
    per_slot, _ = _assign_to_gaps(order, slots, room, mandatory_threshold, shrink_rigid)
    placed = sum(len(entries) for entries in per_slot)
    minutes = sum(duration for entries in per_slot for _, duration in entries)
    return placed, minutes


def enumerate_best_order(
    suggestions: List[Suggestion],
    slots: List[GapSlot],
    room: List[int],
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    permutation_limit: int = DEFAULT_PERMUTATION_LIMIT,
    shrink_rigid: bool = False,
) -> Tuple[List[Suggestion], int]:
    """Try every placement order and keep the one that places the most.

    Orders are scored as ``placed * ORDER_SCORE_WEIGHT + minutes``, so an extra
    placed suggestion always beats extra minutes. Permutations are generated from
    the priority order and the first best one wins ties. Above ``permutation_limit``
    suggestions the priority order is used as is.

    Args:
        suggestions: Suggestions to order, highest priority first
        slots: Gap slots in chronological order
        room: Free minutes per slot
        mandatory_threshold: Need at or above which a suggestion is mandatory
        permutation_limit: Largest group that is enumerated
        shrink_rigid: Let rigid suggestions drop to their base (see select_floors)

    Returns:
        Tuple of (chosen order, permutations evaluated)
    """
    if not suggestions:
        return [], 0

    if len(suggestions) > permutation_limit:
        logger.warning(
            f"{len(suggestions)} suggestions exceed the permutation limit "
            f"({permutation_limit}); keeping priority order"
        )
        return list(suggestions), 0

    ceiling = len(suggestions) * ORDER_SCORE_WEIGHT + sum(s.duration for s in suggestions)
    best_order = list(suggestions)
    best_score = None
    checked = 0

    for order in permutations(suggestions):
        checked += 1
        placed, minutes = evaluate_order(list(order), slots, room, mandatory_threshold, shrink_rigid)
        score = placed * ORDER_SCORE_WEIGHT + minutes
        if best_score is None or score > best_score:
            best_score = score
            best_order = list(order)
        if best_score >= ceiling:
            break

    return best_order, checked


def schedule_greedy(
    ranked: List[Suggestion],
    slots: List[GapSlot],
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    permutation_limit: int = DEFAULT_PERMUTATION_LIMIT,
) -> Tuple[List[ScheduledBlock], List[Suggestion], int]:
    """Schedule ranked suggestions gap by gap in the best order found.

    Mandatory suggestions go first, in the order enumerate_best_order picks. The
    optional ones are then filtered by knapsack_select over the minutes left and
    ordered the same way. Suggestions sharing a gap shrink together.

    Args:
        ranked: Sanitized suggestions, highest priority first
        slots: Gap slots in chronological order
        mandatory_threshold: Need at or above which a suggestion is mandatory
        permutation_limit: Largest group whose orders are enumerated

    Returns:
        Tuple of (blocks in chronological order, dropped suggestions,
        permutations evaluated)
    """
    mandatory, optional = partition_suggestions(ranked, mandatory_threshold)
    room = [slot.remaining for slot in slots]

    mandatory_order, checked = enumerate_best_order(
        mandatory, slots, room, mandatory_threshold, permutation_limit, shrink_rigid=True
    )
    mandatory_entries, dropped = _assign_to_gaps(
        mandatory_order, slots, room, mandatory_threshold, shrink_rigid=True
    )
    room = [room[j] - sum(d for _, d in entries) for j, entries in enumerate(mandatory_entries)]

    selected = knapsack_select(optional, sum(room))
    selected_ids = {s.id for s in selected}

    optional_order, optional_checked = enumerate_best_order(
        selected, slots, room, mandatory_threshold, permutation_limit
    )
    checked += optional_checked
    optional_entries, optional_dropped = _assign_to_gaps(optional_order, slots, room, mandatory_threshold)
    dropped.extend(optional_dropped)
    dropped.extend(s for s in optional if s.id not in selected_ids)

    blocks = []
    for j, slot in enumerate(slots):
        blocks.extend(lay_out(slot, mandatory_entries[j] + optional_entries[j]))

    logger.debug(
        f"Greedy placement placed {len(blocks)} blocks, dropped {len(dropped)}, "
        f"checked {checked} orders"
    )
    return blocks, dropped, checked
