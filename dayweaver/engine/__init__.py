"""Scheduling engine for dayweaver."""

from dayweaver.engine.priority import calculate_priority, sort_by_priority, partition_suggestions, is_mandatory
from dayweaver.engine.durations import fit_duration, allocate_durations
from dayweaver.engine.location_matching import is_location_compatible
from dayweaver.engine.gap_enrichment import build_location_spans, get_location_for_gap, enrich_gaps_with_location
from dayweaver.engine.scheduler import schedule_suggestions, SchedulerOptions

__all__ = [
    "calculate_priority",
    "sort_by_priority",
    "partition_suggestions",
    "is_mandatory",
    "fit_duration",
    "allocate_durations",
    "is_location_compatible",
    "build_location_spans",
    "get_location_for_gap",
    "enrich_gaps_with_location",
    "schedule_suggestions",
    "SchedulerOptions",
]
