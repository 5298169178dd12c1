from __future__ import annotations

from datetime import date

from devquests.core.state import Goal, ProgressState
from devquests.ui.dashboard import (
    ActivityDay,
    achievement_rows,
    activity_grid,
    goal_rows,
    header_summary,
    quest_cards,
    stats_summary,
)


def test_header_summary_matches_progress_bar() -> None:
    header = header_summary(ProgressState(xp=250))
    assert header.level == 2
    assert header.current_level_xp == 150
    assert header.required_xp == 300
    assert header.percent == 50.0


def test_quest_cards_reflect_daily_progress() -> None:
    state = ProgressState(dailies={"leetcode": 3, "commit": 1})
    cards = {card.quest.id: card for card in quest_cards(state, date(2024, 1, 6))}

    assert cards["leetcode"].progress_text == "3/5"
    assert cards["leetcode"].done is False
    assert cards["commit"].done is True
    assert cards["commit"].progress_text == "Done"
    assert cards["article"].progress_text == "Open"


def test_activity_grid_covers_last_28_days() -> None:
    history = {"2024-01-03": 2, "2023-12-07": 1, "2023-12-06": 9}
    grid = activity_grid(history, date(2024, 1, 3))

    assert len(grid) == 28
    assert grid[-1].day == "2024-01-03"
    assert grid[-1].count == 2
    assert grid[-1].intensity == 1
    assert grid[0].day == "2023-12-07"
    assert grid[0].intensity == 1
    assert all(day.count == 0 for day in grid[1:-1])


def test_goal_and_achievement_rows() -> None:
    state = ProgressState(
        goals=[Goal(id="g1", title="Ship", target=4, current=1)],
        unlocked_achievements=["first_quest"],
    )

    rows = goal_rows(state)
    assert rows[0].percent == 25.0
    assert rows[0].progress_text == "1/4"

    unlocked = [row.achievement.id for row in achievement_rows(state) if row.unlocked]
    assert unlocked == ["first_quest"]


def test_stats_summary() -> None:
    state = ProgressState(xp=450, total_completed=12, goals_completed=2, current_streak=4)
    stats = stats_summary(state, date(2024, 1, 3))

    assert stats.level == 3
    assert stats.streak == 4
    assert stats.total_completed == 12
    assert stats.goals_completed == 2
    assert len(stats.activity) == 28


def test_activity_intensity_buckets() -> None:
    expected = {0: 0, 1: 1, 2: 1, 3: 2, 4: 2, 5: 3, 9: 3}
    for count, intensity in expected.items():
        assert ActivityDay(day="2024-01-03", count=count).intensity == intensity
