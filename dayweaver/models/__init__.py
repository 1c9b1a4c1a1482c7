"""Data models for dayweaver."""

from dayweaver.models.gap import Gap, LocationLabel
from dayweaver.models.suggestion import Suggestion, TaskType, LocationPreference
from dayweaver.models.scheduled_block import ScheduledBlock, SchedulerResult
from dayweaver.models.location import EnrichableEvent, EventSource, LocationSpan

__all__ = [
    "Gap",
    "LocationLabel",
    "Suggestion",
    "TaskType",
    "LocationPreference",
    "ScheduledBlock",
    "SchedulerResult",
    "EnrichableEvent",
    "EventSource",
    "LocationSpan",
]
