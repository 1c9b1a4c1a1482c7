"""Shared placement helpers: gap bookkeeping and block construction."""

from typing import List, Tuple
from dayweaver.models.gap import Gap
from dayweaver.models.scheduled_block import ScheduledBlock
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.timeutils import time_to_minutes, minutes_to_time


class GapSlot:
    """A sanitized gap with its start resolved to minutes.

    Tracks the next free minute and the minutes still free, so blocks placed into
    the slot are laid out back to back from the gap start.
    """

    def __init__(self, gap: Gap):
        self.gap = gap
        self.start_minutes = time_to_minutes(gap.start)
        self.capacity = gap.duration
        self.cursor = self.start_minutes
        self.remaining = self.capacity

    def place(self, suggestion: Suggestion, duration: int) -> ScheduledBlock:
        """Append a block of the given duration at the slot's next free minute."""
        if duration > self.remaining:
            raise ValueError(
                f"Block of {duration} min for {suggestion.id} exceeds "
                f"{self.remaining} min left in gap {self.gap.gap_id}"
            )
        block = build_block(suggestion, self.gap, self.cursor, duration)
        self.cursor += duration
        self.remaining -= duration
        return block


def build_block(suggestion: Suggestion, gap: Gap, start_minutes: int, duration: int) -> ScheduledBlock:
    """Create a scheduled block for a suggestion inside a gap."""
    return ScheduledBlock(
        suggestion_id=suggestion.id,
        memo_id=suggestion.task_id,
        gap_id=gap.gap_id,
        start_time=minutes_to_time(start_minutes),
        end_time=minutes_to_time(start_minutes + duration),
        duration=duration,
    )


def make_slots(gaps: List[Gap]) -> List[GapSlot]:
    """Wrap sanitized gaps (already in chronological order) into slots."""
    return [GapSlot(gap) for gap in gaps]


def lay_out(slot: GapSlot, entries: List[Tuple[Suggestion, int]]) -> List[ScheduledBlock]:
    """Place (suggestion, duration) pairs contiguously into a slot, in the given order."""
    return [slot.place(suggestion, duration) for suggestion, duration in entries]
