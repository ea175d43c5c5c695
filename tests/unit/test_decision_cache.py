"""Tests for DecisionCache TTL behavior and decision key builders."""

import pytest

from workshop_access.domain.enums import PermissionScope
from workshop_access.domain.value_objects import PermissionContext, PermissionResult
from workshop_access.infrastructure.cache import (
    DecisionCache,
    decision_key,
    user_prefix,
    validate_key_component,
)

GRANTED = PermissionResult.allow(PermissionScope.WORKSHOP, "granted")
DENIED = PermissionResult.deny("denied")


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_decision_key_layout() -> None:
    """Key is actor|tenant|action|resource|project|team with empty absent fields."""
    assert decision_key("a", "t", "view", "task") == "a|t|view|task||"
    context = PermissionContext(project_id="p", team_id="m")
    assert decision_key("a", "t", "view", "task", context) == "a|t|view|task|p|m"
    assert decision_key("a", "t", "view", "task", PermissionContext(team_id="m")) == (
        "a|t|view|task||m"
    )


def test_user_prefix_matches_decision_keys() -> None:
    assert decision_key("a", "t", "view", "task").startswith(user_prefix("a", "t"))
    assert not decision_key("ab", "t", "view", "task").startswith(user_prefix("a", "t"))


def test_key_component_with_separator_rejected() -> None:
    with pytest.raises(ValueError, match="resource"):
        decision_key("a", "t", "view", "ta|sk")
    with pytest.raises(ValueError):
        validate_key_component("x|y", "actor_id")


def test_get_returns_fresh_entry() -> None:
    clock = _Clock()
    cache = DecisionCache(ttl_seconds=60, clock=clock)
    cache.set("k", GRANTED)
    clock.now = 59.9
    assert cache.get("k") == GRANTED


def test_entry_stale_at_ttl() -> None:
    """An entry exactly ttl_seconds old is a miss."""
    clock = _Clock()
    cache = DecisionCache(ttl_seconds=60, clock=clock)
    cache.set("k", GRANTED)
    clock.now = 60
    assert cache.get("k") is None


def test_stale_entry_overwritten_by_next_write() -> None:
    clock = _Clock()
    cache = DecisionCache(ttl_seconds=60, clock=clock)
    cache.set("k", GRANTED)
    clock.now = 120
    assert cache.get("k") is None
    assert len(cache) == 1

    cache.set("k", DENIED)

    assert cache.get("k") == DENIED
    assert len(cache) == 1


def test_miss_for_unknown_key() -> None:
    assert DecisionCache().get("missing") is None


def test_delete_prefix() -> None:
    cache = DecisionCache()
    cache.set(decision_key("a", "t", "view", "task"), GRANTED)
    cache.set(decision_key("a", "t", "update", "task"), DENIED)
    cache.set(decision_key("a", "u", "view", "task"), GRANTED)
    cache.set(decision_key("b", "t", "view", "task"), GRANTED)

    assert cache.delete_prefix(user_prefix("a", "t")) == 2
    assert len(cache) == 2


def test_delete_segment_matches_whole_components() -> None:
    """Segment deletion matches a full key component, not a substring."""
    cache = DecisionCache()
    cache.set(decision_key("a", "t", "view", "task"), GRANTED)
    cache.set(decision_key("b", "t", "view", "task"), GRANTED)
    cache.set(decision_key("a", "tt", "view", "task"), GRANTED)

    assert cache.delete_segment("t") == 2
    assert len(cache) == 1


def test_clear() -> None:
    cache = DecisionCache()
    cache.set("k1", GRANTED)
    cache.set("k2", DENIED)
    assert cache.clear() == 2
    assert len(cache) == 0


@pytest.mark.parametrize("ttl", [0, -1])
def test_non_positive_ttl_rejected(ttl: float) -> None:
    with pytest.raises(ValueError, match="ttl_seconds"):
        DecisionCache(ttl_seconds=ttl)
