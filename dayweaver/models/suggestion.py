"""Suggestion data model for dayweaver."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TaskType(str, Enum):
    """Kind of task behind a suggestion. Decides shrink behavior."""
    DEADLINE = "deadline"
    ROUTINE = "routine"
    BACKLOG = "backlog"


class LocationPreference(str, Enum):
    """Where the user would rather do the task."""
    HOME = "home/near_home"
    WORKPLACE = "workplace/near_workplace"
    NO_PREFERENCE = "no_preference"


class Suggestion(BaseModel):
    """Candidate task placement produced by the scoring service.

    Durations and scores are deliberately not range-validated here: the scheduler
    repairs or skips malformed records instead of failing the whole request.
    """

    id: str = Field(..., description="Unique suggestion identifier")
    memo_id: Optional[str] = Field(None, description="Underlying task (memo) ID; defaults to id")
    need: float = Field(..., description="Urgency score, 0.0-1.0 (>= mandatory threshold is mandatory)")
    importance: float = Field(0.0, description="Importance score, 0.0-1.0")
    duration: int = Field(..., description="Ask (ideal) session length in minutes")
    base_duration: int = Field(..., description="Minimum viable session length in minutes")
    type: TaskType = Field(TaskType.DEADLINE, description="Task type")
    location_preference: LocationPreference = Field(
        LocationPreference.NO_PREFERENCE,
        description="Preferred location for doing the task",
    )
    is_hidden: bool = Field(False, description="Excluded from scheduling when true")

    @property
    def task_id(self) -> str:
        """Return the memo ID, falling back to the suggestion ID."""
        return self.memo_id or self.id
