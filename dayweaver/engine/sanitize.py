"""Input guards for the scheduler.

Scheduling runs every time the calendar changes, so a bad record must never take the
whole computation down. Each guard repairs what it can, skips what it cannot, and logs
a warning either way.
"""

import logging
import math
from typing import List, Tuple
from dayweaver.models.gap import Gap
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.timeutils import time_to_minutes

logger = logging.getLogger(__name__)


def sanitize_suggestions(suggestions: List[Suggestion]) -> Tuple[List[Suggestion], List[Suggestion]]:
    """Repair or reject malformed suggestions.

    - duplicate IDs: later copies are skipped
    - NaN need/importance, or no positive duration at all: rejected
    - non-positive ask with a positive base: ask set to base
    - non-positive base, or base above ask: base set to ask
    - negative need/importance: clamped to 0

    Input suggestions are never mutated; repaired ones are copies.

    Args:
        suggestions: Raw suggestions

    Returns:
        Tuple of (usable_suggestions, rejected_suggestions), both in input order
    """
    usable = []
    rejected = []
    seen_ids = set()

    for suggestion in suggestions:
        if suggestion.id in seen_ids:
            logger.warning(f"Skipping duplicate suggestion {suggestion.id}")
            continue
        seen_ids.add(suggestion.id)

        if math.isnan(suggestion.need) or math.isnan(suggestion.importance):
            logger.warning(f"Rejecting suggestion {suggestion.id}: need/importance is NaN")
            rejected.append(suggestion)
            continue

        updates = {}
        duration = suggestion.duration
        base = suggestion.base_duration

        if duration <= 0:
            if base <= 0:
                logger.warning(
                    f"Rejecting suggestion {suggestion.id}: no positive duration "
                    f"(duration={duration}, base_duration={base})"
                )
                rejected.append(suggestion)
                continue
            logger.warning(f"Suggestion {suggestion.id}: duration={duration} replaced by base_duration={base}")
            duration = base
            updates["duration"] = duration

        if base <= 0 or base > duration:
            logger.warning(f"Suggestion {suggestion.id}: base_duration={base} clamped to duration={duration}")
            updates["base_duration"] = duration

        if suggestion.need < 0:
            logger.warning(f"Suggestion {suggestion.id}: negative need {suggestion.need} clamped to 0")
            updates["need"] = 0.0
        if suggestion.importance < 0:
            logger.warning(f"Suggestion {suggestion.id}: negative importance {suggestion.importance} clamped to 0")
            updates["importance"] = 0.0

        usable.append(suggestion.model_copy(update=updates) if updates else suggestion)

    return usable, rejected


def sanitize_gaps(gaps: List[Gap]) -> List[Gap]:
    """Repair or skip malformed gaps and return them in chronological order.

    - duplicate IDs, unparseable times, end before start: skipped
    - duration different from end - start: the smaller of the two (never negative)
    - a gap overlapping an earlier one: skipped

    Args:
        gaps: Raw gaps

    Returns:
        Usable gaps sorted by start time
    """
    parsed = []
    seen_ids = set()

    for gap in gaps:
        if gap.gap_id in seen_ids:
            logger.warning(f"Skipping duplicate gap {gap.gap_id}")
            continue
        seen_ids.add(gap.gap_id)

        try:
            start = time_to_minutes(gap.start)
            end = time_to_minutes(gap.end)
        except ValueError as e:
            logger.warning(f"Skipping gap {gap.gap_id}: {e}")
            continue

        if end < start:
            logger.warning(f"Skipping gap {gap.gap_id}: end {gap.end} is before start {gap.start}")
            continue

        span = end - start
        if gap.duration != span:
            fixed = max(min(gap.duration, span), 0)
            logger.warning(
                f"Gap {gap.gap_id}: duration {gap.duration} does not match "
                f"{gap.start}-{gap.end} ({span} min); using {fixed}"
            )
            gap = gap.model_copy(update={"duration": fixed})

        parsed.append((start, end, gap))

    parsed.sort(key=lambda item: (item[0], item[1]))

    usable = []
    last_end = None
    for start, end, gap in parsed:
        if last_end is not None and start < last_end:
            logger.warning(f"Skipping gap {gap.gap_id}: overlaps an earlier gap")
            continue
        usable.append(gap)
        last_end = end

    return usable
