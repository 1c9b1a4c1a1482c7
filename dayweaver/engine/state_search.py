"""State-space search scheduler.

Mandatory suggestions are assigned to gaps by a bounded depth-first search that
looks at whole assignments instead of committing one item at a time, so a high
priority task is never pushed out by an earlier greedy choice. Optional suggestions
then fill what is left, and every gap's durations are settled together so competing
items shrink at the same time instead of first-come-first-served.
"""

import logging
from typing import List, Optional, Tuple
from dayweaver.models.constants import DEFAULT_MANDATORY_THRESHOLD, DEFAULT_SEARCH_NODE_LIMIT
from dayweaver.models.scheduled_block import ScheduledBlock
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.durations import allocate_durations, duration_bounds, select_floors
from dayweaver.engine.location_matching import can_use_gap
from dayweaver.engine.placement import GapSlot, lay_out
from dayweaver.engine.priority import partition_suggestions

logger = logging.getLogger(__name__)


class MandatorySearch:
    """Depth-first search over gap assignments for mandatory suggestions.

    Every suggestion either goes into a compatible gap whose base durations still
    fit, or is skipped. Complete assignments are ranked by:

    1. number of suggestions placed
    2. which suggestions are placed, compared in priority order
    3. number of distinct gaps used
    4. total minutes once each gap's durations are allocated

    Before searching, a best-fit pass (longest base first, tightest gap that still
    fits) provides a starting assignment, so a small node budget still returns a
    packed schedule. The search only replaces it with a strictly better one. At each
    step, empty gaps are tried first, then the ones with the most slack. The search
    stops after ``node_limit`` nodes and keeps the best assignment seen so far.
    """

    def __init__(
        self,
        suggestions: List[Suggestion],
        slots: List[GapSlot],
        mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
        node_limit: int = DEFAULT_SEARCH_NODE_LIMIT,
    ):
        self.suggestions = suggestions
        self.slots = slots
        self.mandatory_threshold = mandatory_threshold
        self.node_limit = node_limit
        self.nodes_visited = 0
        self.compatible = [
            [j for j, slot in enumerate(slots) if can_use_gap(s, slot.gap)]
            for s in suggestions
        ]
        self._assignment: List[List[int]] = [[] for _ in slots]
        self._placed = [False] * len(suggestions)
        self._best_key: Optional[Tuple] = None
        self._best_assignment: List[List[int]] = [[] for _ in slots]

    def run(self) -> List[List[int]]:
        """Run the search.

        Returns:
            For each slot, indices into ``suggestions`` assigned to it (priority order)
        """
        self._seed_best_fit()
        self._visit(0)
        if self.nodes_visited >= self.node_limit:
            logger.warning(f"Mandatory search stopped at node limit ({self.node_limit})")
        return self._best_assignment

    def _members(self, indices: List[int]) -> List[Suggestion]:
        return [self.suggestions[i] for i in indices]

    def _floors(self, indices: List[int], j: int) -> Optional[List[int]]:
        return select_floors(self._members(indices), self.slots[j].capacity, shrink_rigid=True)

    def _seed_best_fit(self) -> None:
        by_base = sorted(
            range(len(self.suggestions)),
            key=lambda i: duration_bounds(self.suggestions[i])[0],
            reverse=True,
        )

        for i in by_base:
            chosen = None
            best_slack = None
            for j in self.compatible[i]:
                candidate = sorted(self._assignment[j] + [i])
                floors = self._floors(candidate, j)
                if floors is None:
                    continue
                slack = self.slots[j].capacity - sum(floors)
                if best_slack is None or slack < best_slack:
                    best_slack = slack
                    chosen = j
            if chosen is not None:
                self._assignment[chosen] = sorted(self._assignment[chosen] + [i])
                self._placed[i] = True

        self._evaluate()
        self._assignment = [[] for _ in self.slots]
        self._placed = [False] * len(self.suggestions)

    def _candidate_order(self, k: int) -> List[int]:
        def slack(j: int) -> int:
            floors = self._floors(self._assignment[j], j) or []
            return self.slots[j].capacity - sum(floors)

        return sorted(
            self.compatible[k],
            key=lambda j: (bool(self._assignment[j]), -slack(j), j),
        )

    def _visit(self, k: int) -> None:
        if self.nodes_visited >= self.node_limit:
            return
        self.nodes_visited += 1

        if k == len(self.suggestions):
            self._evaluate()
            return

        placed_so_far = sum(self._placed)
        remaining = len(self.suggestions) - k
        if self._best_key is not None and placed_so_far + remaining < self._best_key[0]:
            return

        for j in self._candidate_order(k):
            candidate = self._assignment[j] + [k]
            if self._floors(candidate, j) is None:
                continue
            self._assignment[j].append(k)
            self._placed[k] = True
            self._visit(k + 1)
            self._assignment[j].pop()
            self._placed[k] = False

        self._visit(k + 1)

    def _evaluate(self) -> None:
        total_minutes = 0
        gaps_used = 0
        for j, indices in enumerate(self._assignment):
            if not indices:
                continue
            gaps_used += 1
            durations = allocate_durations(
                self._members(indices),
                self.slots[j].capacity,
                self.mandatory_threshold,
                shrink_rigid=True,
            )
            total_minutes += sum(durations)

        key = (sum(self._placed), tuple(self._placed), gaps_used, total_minutes)
        if self._best_key is None or key > self._best_key:
            self._best_key = key
            self._best_assignment = [list(indices) for indices in self._assignment]


def fill_optional(
    optional: List[Suggestion],
    slots: List[GapSlot],
    room: List[int],
) -> Tuple[List[List[Suggestion]], List[Suggestion]]:
    """Assign optional suggestions (priority order) to gaps.

    Each goes to the first compatible gap where all of that gap's optional asks,
    its own included, still fit in full. Otherwise it goes to the compatible gap
    with the most slack left over the floors (earliest gap on ties). Otherwise it
    is dropped.

    Args:
        optional: Optional suggestions, highest priority first
        slots: Gap slots in chronological order
        room: Minutes per slot left after the mandatory suggestions

    Returns:
        Tuple of (suggestions per slot, dropped suggestions)
    """
    per_slot: List[List[Suggestion]] = [[] for _ in slots]
    dropped = []

    for suggestion in optional:
        chosen = None

        for j, slot in enumerate(slots):
            if not can_use_gap(suggestion, slot.gap):
                continue
            asks = sum(s.duration for s in per_slot[j]) + suggestion.duration
            if asks <= room[j]:
                chosen = j
                break

        if chosen is None:
            best_slack = None
            for j, slot in enumerate(slots):
                if not can_use_gap(suggestion, slot.gap):
                    continue
                floors = select_floors(per_slot[j] + [suggestion], room[j])
                if floors is None:
                    continue
                slack = room[j] - sum(floors)
                if best_slack is None or slack > best_slack:
                    best_slack = slack
                    chosen = j

        if chosen is None:
            logger.debug(f"No gap left for optional suggestion {suggestion.id}")
            dropped.append(suggestion)
        else:
            per_slot[chosen].append(suggestion)

    return per_slot, dropped


def schedule_with_state_search(
    ranked: List[Suggestion],
    slots: List[GapSlot],
    mandatory_threshold: float = DEFAULT_MANDATORY_THRESHOLD,
    node_limit: int = DEFAULT_SEARCH_NODE_LIMIT,
) -> Tuple[List[ScheduledBlock], List[Suggestion], int]:
    """Schedule ranked suggestions into gap slots.

    Args:
        ranked: Sanitized suggestions, highest priority first
        slots: Gap slots in chronological order
        mandatory_threshold: Need at or above which a suggestion is mandatory
        node_limit: Node budget for the mandatory search

    Returns:
        Tuple of (blocks in chronological order, dropped suggestions, nodes visited)
    """
    mandatory, optional = partition_suggestions(ranked, mandatory_threshold)

    search = MandatorySearch(mandatory, slots, mandatory_threshold, node_limit)
    assignment = search.run()

    mandatory_entries: List[List[Tuple[Suggestion, int]]] = []
    room = []
    placed_ids = set()
    for j, indices in enumerate(assignment):
        members = [mandatory[i] for i in indices]
        durations = (
            allocate_durations(members, slots[j].capacity, mandatory_threshold, shrink_rigid=True)
            if members else []
        )
        mandatory_entries.append(list(zip(members, durations)))
        room.append(slots[j].capacity - sum(durations))
        placed_ids.update(s.id for s in members)

    dropped = [s for s in mandatory if s.id not in placed_ids]

    per_slot, optional_dropped = fill_optional(optional, slots, room)
    dropped.extend(optional_dropped)

    blocks = []
    for j, slot in enumerate(slots):
        entries = list(mandatory_entries[j])
        if per_slot[j]:
            durations = allocate_durations(per_slot[j], room[j], mandatory_threshold)
            entries.extend(zip(per_slot[j], durations))
        blocks.extend(lay_out(slot, entries))

    logger.debug(
        f"State search placed {len(blocks)} blocks, dropped {len(dropped)}, "
        f"visited {search.nodes_visited} nodes"
    )
    return blocks, dropped, search.nodes_visited
