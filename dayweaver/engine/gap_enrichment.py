"""Gap enrichment: location labels for gaps.

Locations are layered. Home is the base layer covering the whole day. Timetable
events form workplace spans and calendar events form other spans; events of the same
kind that overlap or touch are merged into one span. A gap takes the location of the
shortest span it overlaps, so a short appointment inside a long workday wins.
"""

import logging
import math
from typing import List
from dayweaver.models.constants import MINUTES_PER_DAY
from dayweaver.models.gap import Gap, LocationLabel
from dayweaver.models.location import EnrichableEvent, EventSource, LocationSpan
from dayweaver.engine.timeutils import time_to_minutes

logger = logging.getLogger(__name__)

_SOURCE_LOCATIONS = (
    (EventSource.TIMETABLE, LocationLabel.WORKPLACE),
    (EventSource.CALENDAR, LocationLabel.OTHER),
)


def _merge_intervals(intervals):
    merged = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return merged


def build_location_spans(events: List[EnrichableEvent]) -> List[LocationSpan]:
    """Build location spans from the day's events.

    Args:
        events: Timetable and calendar events

    Returns:
        Workplace spans, then other spans (each chronological), then the home span
    """
    intervals = {location: [] for _, location in _SOURCE_LOCATIONS}

    for event in events:
        try:
            start = time_to_minutes(event.start)
            end = time_to_minutes(event.end)
        except ValueError as e:
            logger.warning(f"Skipping event {event.id} for location spans: {e}")
            continue
        if end <= start:
            logger.warning(f"Skipping event {event.id} for location spans: empty or inverted interval")
            continue
        for source, location in _SOURCE_LOCATIONS:
            if EventSource(event.source) == source:
                intervals[location].append((start, end))

    spans = []
    for _, location in _SOURCE_LOCATIONS:
        for start, end in _merge_intervals(intervals[location]):
            spans.append(LocationSpan(location=location, start=start, end=end, duration=end - start))

    spans.append(LocationSpan(location=LocationLabel.HOME, start=0, end=MINUTES_PER_DAY, duration=math.inf))
    return spans


def get_location_for_gap(gap: Gap, spans: List[LocationSpan]) -> LocationLabel:
    """Get the location of a gap.

    Only overlaps with positive width count; a gap that merely touches a span at
    its boundary does not overlap it. Among overlapping non-home spans the shortest
    wins, earlier spans winning ties. With no overlap the gap is at home.

    Raises:
        ValueError: If the gap's times are not valid HH:MM strings
    """
    gap_start = time_to_minutes(gap.start)
    gap_end = time_to_minutes(gap.end)

    best = None
    for span in spans:
        if span.location == LocationLabel.HOME:
            continue
        if span.start < gap_end and span.end > gap_start:
            if best is None or span.duration < best.duration:
                best = span

    return best.location if best is not None else LocationLabel.HOME


def enrich_gaps_with_location(gaps: List[Gap], events: List[EnrichableEvent]) -> List[Gap]:
    """Return copies of the gaps with ``location_label`` set.

    Input gaps are not modified, and enriching an already enriched list gives the
    same labels again. A gap whose times cannot be parsed is returned unchanged.
    """
    spans = build_location_spans(events)

    enriched = []
    for gap in gaps:
        try:
            label = get_location_for_gap(gap, spans)
        except ValueError as e:
            logger.warning(f"Leaving gap {gap.gap_id} unlabeled: {e}")
            enriched.append(gap.model_copy())
            continue
        enriched.append(gap.model_copy(update={"location_label": label}))

    return enriched
