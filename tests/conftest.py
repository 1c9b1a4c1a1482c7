"""Pytest fixtures and configuration for dayweaver tests."""

import pytest
from fastapi.testclient import TestClient

from dayweaver.models.gap import Gap
from dayweaver.models.suggestion import Suggestion, TaskType, LocationPreference
from dayweaver.engine.timeutils import time_to_minutes


@pytest.fixture(autouse=True)
def clean_scheduler_env(monkeypatch):
    """Keep tests independent of DAYWEAVER_* variables in the shell or a .env file."""
    for name in (
        "DAYWEAVER_MANDATORY_THRESHOLD",
        "DAYWEAVER_USE_STATE_SEARCH",
        "DAYWEAVER_SEARCH_NODE_LIMIT",
        "DAYWEAVER_PERMUTATION_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_suggestion_base():
    """Base suggestion data for creating test suggestions.

    Returns a dict with default suggestion attributes that can be overridden.
    """
    return {
        "id": "suggestion-1",
        "memo_id": None,
        "need": 0.5,
        "importance": 0.0,
        "duration": 60,
        "base_duration": 30,
        "type": TaskType.DEADLINE,
        "location_preference": LocationPreference.NO_PREFERENCE,
        "is_hidden": False,
    }


@pytest.fixture
def make_suggestion(sample_suggestion_base):
    """Factory for suggestions: make_suggestion(id, need, importance, duration, base, type)."""
    def _make(
        suggestion_id,
        need,
        importance,
        duration,
        base_duration,
        task_type=TaskType.DEADLINE,
        **overrides,
    ):
        return Suggestion(**{
            **sample_suggestion_base,
            "id": suggestion_id,
            "need": need,
            "importance": importance,
            "duration": duration,
            "base_duration": base_duration,
            "type": task_type,
            **overrides,
        })
    return _make


@pytest.fixture
def make_gap():
    """Factory for gaps: make_gap(gap_id, start, end). Duration defaults to end - start."""
    def _make(gap_id, start, end, duration=None, location_label=None):
        if duration is None:
            duration = time_to_minutes(end) - time_to_minutes(start)
        return Gap(
            gap_id=gap_id,
            start=start,
            end=end,
            duration=duration,
            location_label=location_label,
        )
    return _make


@pytest.fixture
def test_client():
    """Create a FastAPI test client with an empty schedule store."""
    from dayweaver.api import app as app_module

    app_module.schedule_store = None
    with TestClient(app_module.app) as client:
        yield client
    app_module.schedule_store = None
