from dayweaver.config import get_scheduler_settings
from dayweaver.models.constants import (
    DEFAULT_MANDATORY_THRESHOLD,
    DEFAULT_PERMUTATION_LIMIT,
    DEFAULT_SEARCH_NODE_LIMIT,
)


def test_defaults_without_env():
    settings = get_scheduler_settings()
    assert settings.mandatory_threshold == DEFAULT_MANDATORY_THRESHOLD
    assert settings.use_state_search is True
    assert settings.search_node_limit == DEFAULT_SEARCH_NODE_LIMIT


def test_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("DAYWEAVER_MANDATORY_THRESHOLD", "0.9")
    monkeypatch.setenv("DAYWEAVER_USE_STATE_SEARCH", "off")
    monkeypatch.setenv("DAYWEAVER_SEARCH_NODE_LIMIT", "250")

    settings = get_scheduler_settings()
    assert settings.mandatory_threshold == 0.9
    assert settings.use_state_search is False
    assert settings.search_node_limit == 250


def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("DAYWEAVER_MANDATORY_THRESHOLD", "high")
    monkeypatch.setenv("DAYWEAVER_USE_STATE_SEARCH", "maybe")
    monkeypatch.setenv("DAYWEAVER_SEARCH_NODE_LIMIT", "0")

    settings = get_scheduler_settings()
    assert settings.mandatory_threshold == DEFAULT_MANDATORY_THRESHOLD
    assert settings.use_state_search is True
    assert settings.search_node_limit == DEFAULT_SEARCH_NODE_LIMIT
    assert "DAYWEAVER_SEARCH_NODE_LIMIT" in caplog.text


def test_blank_values_are_unset(monkeypatch):
    monkeypatch.setenv("DAYWEAVER_SEARCH_NODE_LIMIT", "  ")
    assert get_scheduler_settings().search_node_limit == DEFAULT_SEARCH_NODE_LIMIT


def test_permutation_limit_from_env(monkeypatch):
    assert get_scheduler_settings().permutation_limit == DEFAULT_PERMUTATION_LIMIT

    monkeypatch.setenv("DAYWEAVER_PERMUTATION_LIMIT", "0")
    assert get_scheduler_settings().permutation_limit == 0

    monkeypatch.setenv("DAYWEAVER_PERMUTATION_LIMIT", "-2")
    assert get_scheduler_settings().permutation_limit == DEFAULT_PERMUTATION_LIMIT
