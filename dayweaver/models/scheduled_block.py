"""ScheduledBlock and SchedulerResult data models for dayweaver."""

from typing import List
from pydantic import BaseModel, Field

from dayweaver.models.suggestion import Suggestion


class ScheduledBlock(BaseModel):
    """One suggestion committed to one gap with concrete times."""

    suggestion_id: str = Field(..., description="ID of the scheduled suggestion")
    memo_id: str = Field(..., description="ID of the underlying task")
    gap_id: str = Field(..., description="ID of the gap holding this block")
    start_time: str = Field(..., description="Block start (HH:MM)")
    end_time: str = Field(..., description="Block end (HH:MM)")
    duration: int = Field(..., description="Block length in minutes")


class SchedulerResult(BaseModel):
    """Outcome of a scheduling run.

    Infeasibility is never an error: suggestions that could not be placed end up in
    ``dropped``, and mandatory ones are additionally listed in ``mandatory_dropped`` so
    the caller can warn the user.
    """

    scheduled: List[ScheduledBlock] = Field(default_factory=list)
    dropped: List[Suggestion] = Field(default_factory=list)
    mandatory_dropped: List[Suggestion] = Field(default_factory=list)
    total_scheduled_minutes: int = Field(0, description="Sum of scheduled block durations")
    total_dropped_minutes: int = Field(0, description="Sum of ask durations of dropped suggestions")
    states_explored: int = Field(0, description="Search nodes visited (0 for greedy placement)")
    permutations_evaluated: int = Field(
        0, description="Placement orders tried by the greedy variant (0 for state search)"
    )
