"""Location span and event models used by gap enrichment."""

from enum import Enum
from pydantic import BaseModel, Field

from dayweaver.models.gap import LocationLabel


class EventSource(str, Enum):
    """Where an event came from. Decides which location it implies."""
    TIMETABLE = "timetable"
    CALENDAR = "calendar"


class EnrichableEvent(BaseModel):
    """Calendar or timetable event reduced to what location labeling needs."""

    id: str = Field(..., description="Event identifier")
    title: str = Field("", description="Event title")
    start: str = Field(..., description="Start time of day (HH:MM)")
    end: str = Field(..., description="End time of day (HH:MM)")
    source: EventSource = Field(..., description="Event source")


class LocationSpan(BaseModel):
    """Continuous period of the day attributed to one location."""

    location: LocationLabel = Field(..., description="Location label")
    start: int = Field(..., description="Start in minutes from midnight")
    end: int = Field(..., description="End in minutes from midnight")
    duration: float = Field(..., description="Length in minutes (inf for the base home span)")
