"""FastAPI web application for dayweaver."""

import logging
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from dayweaver.models.gap import Gap
from dayweaver.models.location import EnrichableEvent
from dayweaver.models.scheduled_block import SchedulerResult
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.gap_enrichment import enrich_gaps_with_location
from dayweaver.engine.scheduler import SchedulerOptions, schedule_suggestions

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="dayweaver API",
    description="Places suggested tasks into the free gaps of your day",
    version="0.1.0"
)

# Last computed schedule, kept in memory
schedule_store: Optional[SchedulerResult] = None


# Request/response models
class ScheduleRequest(BaseModel):
    """Request body for building a schedule."""
    suggestions: List[Suggestion]
    gaps: List[Gap]
    options: Optional[SchedulerOptions] = None


class ScheduleResponse(SchedulerResult):
    """Scheduler result plus caller-facing status."""
    warning: Optional[str] = Field(None, description="Set when mandatory suggestions could not be placed")
    changed: bool = Field(True, description="False when the result is identical to the previous one")


class EnrichRequest(BaseModel):
    """Request body for gap enrichment."""
    gaps: List[Gap]
    events: List[EnrichableEvent] = Field(default_factory=list)


def _mandatory_warning(result: SchedulerResult) -> Optional[str]:
    if not result.mandatory_dropped:
        return None
    ids = ", ".join(s.id for s in result.mandatory_dropped)
    return f"{len(result.mandatory_dropped)} mandatory task(s) do not fit today: {ids}"


def _to_response(result: SchedulerResult, changed: bool) -> ScheduleResponse:
    return ScheduleResponse(
        **result.model_dump(),
        warning=_mandatory_warning(result),
        changed=changed,
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/schedule", response_model=ScheduleResponse)
async def build_schedule(request: ScheduleRequest):
    """Build a schedule from suggestions and gaps.

    The new result replaces the stored one only when it differs from it.
    """
    global schedule_store

    try:
        result = schedule_suggestions(request.suggestions, request.gaps, request.options)
    except Exception as e:
        logger.error(f"Failed to build schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to build schedule: {str(e)}")

    changed = schedule_store is None or schedule_store.model_dump_json() != result.model_dump_json()
    if changed:
        schedule_store = result
    else:
        logger.debug("Schedule unchanged; keeping stored result")

    return _to_response(schedule_store, changed)


@app.get("/schedule", response_model=ScheduleResponse)
async def view_schedule():
    """Get the last computed schedule."""
    if schedule_store is None:
        raise HTTPException(status_code=404, detail="No schedule available. Build a schedule first.")
    return _to_response(schedule_store, changed=False)


@app.post("/gaps/enrich", response_model=List[Gap])
async def enrich_gaps(request: EnrichRequest):
    """Label gaps with the user's probable location."""
    return enrich_gaps_with_location(request.gaps, request.events)
