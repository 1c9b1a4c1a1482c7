"""Gap data model for dayweaver."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class LocationLabel(str, Enum):
    """Probable location of the user during a gap."""
    HOME = "home"
    WORKPLACE = "workplace"
    OTHER = "other"


class Gap(BaseModel):
    """Contiguous free interval within a single day.

    Gaps are derived from the day's calendar and timetable events and are never
    persisted; they are rebuilt whenever those events change.
    """

    gap_id: str = Field(..., description="Identifier, stable while the interval is unchanged")
    start: str = Field(..., description="Start time of day (HH:MM)")
    end: str = Field(..., description="End time of day (HH:MM)")
    duration: int = Field(..., description="Length in minutes (end - start)")
    location_label: Optional[LocationLabel] = Field(
        None, description="Location derived by gap enrichment (None when unlabeled)"
    )
