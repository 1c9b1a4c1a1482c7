"""Scheduler entry point for dayweaver.

Places ranked suggestions into the day's free gaps. The scheduler is deterministic:
the same suggestions, gaps and options always produce the same result. Infeasible
input is never an error; whatever cannot be placed is reported as dropped.
"""

import logging
from typing import List, Optional
from pydantic import BaseModel, Field

from dayweaver.config import get_scheduler_settings
from dayweaver.models.gap import Gap
from dayweaver.models.scheduled_block import SchedulerResult
from dayweaver.models.suggestion import Suggestion
from dayweaver.engine.greedy import schedule_greedy
from dayweaver.engine.placement import make_slots
from dayweaver.engine.priority import is_mandatory, sort_by_priority
from dayweaver.engine.sanitize import sanitize_gaps, sanitize_suggestions
from dayweaver.engine.state_search import schedule_with_state_search

logger = logging.getLogger(__name__)


class SchedulerOptions(BaseModel):
    """Per-call scheduler options. Unset fields fall back to the environment."""

    use_state_search: Optional[bool] = Field(None, description="Use state-space search (default true)")
    mandatory_threshold: Optional[float] = Field(None, description="Need at or above which a suggestion is mandatory")
    search_node_limit: Optional[int] = Field(None, ge=1, description="Node budget for the mandatory search")
    permutation_limit: Optional[int] = Field(
        None, ge=0, description="Largest group whose orders the greedy variant enumerates"
    )

    def resolve(self) -> "SchedulerOptions":
        """Return a copy with every unset field filled from the current settings."""
        settings = get_scheduler_settings()
        return SchedulerOptions(
            use_state_search=(
                settings.use_state_search if self.use_state_search is None else self.use_state_search
            ),
            mandatory_threshold=(
                settings.mandatory_threshold if self.mandatory_threshold is None else self.mandatory_threshold
            ),
            search_node_limit=(
                settings.search_node_limit if self.search_node_limit is None else self.search_node_limit
            ),
            permutation_limit=(
                settings.permutation_limit if self.permutation_limit is None else self.permutation_limit
            ),
        )


def schedule_suggestions(
    suggestions: List[Suggestion],
    gaps: List[Gap],
    options: Optional[SchedulerOptions] = None,
) -> SchedulerResult:
    """Schedule suggestions into gaps.

    Hidden suggestions are left out entirely. Malformed suggestions and gaps are
    repaired or skipped (see sanitize); skipped suggestions are reported as dropped.

    Args:
        suggestions: Suggestions to place
        gaps: Free intervals of the day
        options: Scheduler options (defaults from the environment)

    Returns:
        SchedulerResult with blocks in chronological order and dropped suggestions in
        priority order
    """
    resolved = (options or SchedulerOptions()).resolve()
    threshold = resolved.mandatory_threshold

    visible = [s for s in suggestions if not s.is_hidden]
    if len(visible) != len(suggestions):
        logger.debug(f"Ignoring {len(suggestions) - len(visible)} hidden suggestions")

    usable, rejected = sanitize_suggestions(visible)
    ranked = sort_by_priority(usable)
    slots = make_slots(sanitize_gaps(gaps))

    if resolved.use_state_search:
        blocks, dropped, states_explored = schedule_with_state_search(
            ranked, slots, threshold, resolved.search_node_limit
        )
        permutations_evaluated = 0
    else:
        blocks, dropped, permutations_evaluated = schedule_greedy(
            ranked, slots, threshold, resolved.permutation_limit
        )
        states_explored = 0

    dropped_ids = {s.id for s in dropped}
    all_dropped = [s for s in ranked if s.id in dropped_ids] + rejected
    mandatory_dropped = [s for s in all_dropped if is_mandatory(s, threshold)]

    result = SchedulerResult(
        scheduled=blocks,
        dropped=all_dropped,
        mandatory_dropped=mandatory_dropped,
        total_scheduled_minutes=sum(b.duration for b in blocks),
        total_dropped_minutes=sum(max(s.duration, 0) for s in all_dropped),
        states_explored=states_explored,
        permutations_evaluated=permutations_evaluated,
    )

    if mandatory_dropped:
        logger.warning(
            f"Could not place {len(mandatory_dropped)} mandatory suggestion(s): "
            f"{', '.join(s.id for s in mandatory_dropped)}"
        )
    logger.info(
        f"Scheduled {len(blocks)} blocks ({result.total_scheduled_minutes} min), "
        f"dropped {len(all_dropped)} ({result.total_dropped_minutes} min)"
    )
    return result
