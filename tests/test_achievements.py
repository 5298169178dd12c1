from __future__ import annotations

import dataclasses

import pytest

from devquests.core.achievements import (
    ACHIEVEMENTS,
    Achievement,
    ProgressSnapshot,
    achievement_by_id,
    evaluate_achievements,
)
from devquests.core.progression import xp_threshold_for_level
from devquests.core.state import ProgressState
from devquests.quests.catalog import QuestKind, Quest


def test_level_5_unlocks_once_at_level_start() -> None:
    state = ProgressState(xp=xp_threshold_for_level(4) - 1)
    assert evaluate_achievements(state) == []
    assert "level_5" not in state.unlocked_achievements

    state.xp = xp_threshold_for_level(4)
    unlocked = evaluate_achievements(state)
    assert [a.id for a in unlocked] == ["level_5"]

    assert evaluate_achievements(state) == []
    assert state.unlocked_achievements.count("level_5") == 1


def test_unlocks_follow_table_order() -> None:
    state = ProgressState(total_completed=10, goals_completed=1)
    unlocked = evaluate_achievements(state)
    assert [a.id for a in unlocked] == ["first_quest", "complete_10", "first_goal"]
    assert state.unlocked_achievements == ["first_quest", "complete_10", "first_goal"]


def test_unlocked_achievements_are_never_removed() -> None:
    state = ProgressState(total_completed=1)
    evaluate_achievements(state)
    state.total_completed = 0
    evaluate_achievements(state)
    assert "first_quest" in state.unlocked_achievements


def test_custom_quest_and_streak_conditions() -> None:
    state = ProgressState(current_streak=7)
    state.custom_quests.append(
        Quest(id="q1", title="Stretch", kind=QuestKind.BOOLEAN, xp_per=20, custom=True)
    )
    ids = [a.id for a in evaluate_achievements(state)]
    assert ids == ["streak_7", "custom_quest"]


def test_achievement_lookup() -> None:
    assert len({a.id for a in ACHIEVEMENTS}) == len(ACHIEVEMENTS)
    found = achievement_by_id("streak_30")
    assert found is not None
    assert found.name == "Monthly Master"
    assert achievement_by_id("missing") is None


def test_conditions_see_a_frozen_snapshot() -> None:
    seen: list[ProgressSnapshot] = []

    def record(snapshot: ProgressSnapshot) -> bool:
        seen.append(snapshot)
        return snapshot.xp >= 10

    table = (Achievement(id="ten_xp", name="Ten", description="", emoji="*", condition=record),)
    state = ProgressState(xp=12, total_completed=3)

    assert [a.id for a in evaluate_achievements(state, table)] == ["ten_xp"]
    snapshot = seen[0]
    assert snapshot.total_completed == 3
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.xp = 0  # type: ignore[misc]
    assert state.xp == 12
