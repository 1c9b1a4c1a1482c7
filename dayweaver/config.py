"""Runtime settings for dayweaver.

Values come from the environment (optionally a `.env` file) and are read at call time,
so a running process or a test can change them without re-importing.
"""

import logging
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from dayweaver.models.constants import (
    DEFAULT_MANDATORY_THRESHOLD,
    DEFAULT_PERMUTATION_LIMIT,
    DEFAULT_SEARCH_NODE_LIMIT,
)

load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class SchedulerSettings(BaseModel):
    """Scheduler defaults resolved from the environment."""

    mandatory_threshold: float = Field(
        DEFAULT_MANDATORY_THRESHOLD,
        description="Need at or above which a suggestion is mandatory",
    )
    use_state_search: bool = Field(True, description="Use state-space search instead of legacy greedy")
    search_node_limit: int = Field(
        DEFAULT_SEARCH_NODE_LIMIT,
        description="Maximum nodes the mandatory placement search may visit",
    )
    permutation_limit: int = Field(
        DEFAULT_PERMUTATION_LIMIT,
        description="Largest group whose placement orders the greedy variant enumerates",
    )


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
        return default


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
        return default
    if value < minimum:
        logger.warning(f"Ignoring {name}={value} (must be >= {minimum}); using {default}")
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
    return default


def get_scheduler_settings() -> SchedulerSettings:
    """Return scheduler settings from the current environment.

    Environment variables:
        DAYWEAVER_MANDATORY_THRESHOLD: float, default 1.0
        DAYWEAVER_USE_STATE_SEARCH: bool, default true
        DAYWEAVER_SEARCH_NODE_LIMIT: int >= 1, default 5000
        DAYWEAVER_PERMUTATION_LIMIT: int >= 0, default 8

    Invalid values are logged and replaced by their default.
    """
    return SchedulerSettings(
        mandatory_threshold=_env_float("DAYWEAVER_MANDATORY_THRESHOLD", DEFAULT_MANDATORY_THRESHOLD),
        use_state_search=_env_bool("DAYWEAVER_USE_STATE_SEARCH", True),
        search_node_limit=_env_int("DAYWEAVER_SEARCH_NODE_LIMIT", DEFAULT_SEARCH_NODE_LIMIT),
        permutation_limit=_env_int("DAYWEAVER_PERMUTATION_LIMIT", DEFAULT_PERMUTATION_LIMIT, minimum=0),
    )
