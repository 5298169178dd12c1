"""View models for the dashboard, kept free of any UI toolkit."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from devquests.core.achievements import ACHIEVEMENTS, Achievement
from devquests.core.progression import LevelProgress, level_progress
from devquests.core.state import Goal, ProgressState
from devquests.core.streak import day_key
from devquests.quests.catalog import Quest, QuestKind, quests_for_day


ACTIVITY_DAYS = 28


@dataclass(frozen=True)
class QuestCard:
    quest: Quest
    progress: int

    @property
    def done(self) -> bool:
        return self.progress >= self.quest.max

    @property
    def progress_text(self) -> str:
        if self.quest.kind is QuestKind.BOOLEAN:
            return "Done" if self.done else "Open"
        return f"{self.progress}/{self.quest.max}"


@dataclass(frozen=True)
class GoalRow:
    goal: Goal

    @property
    def percent(self) -> float:
        return min(100.0, (self.goal.current / self.goal.target) * 100.0)

    @property
    def progress_text(self) -> str:
        return f"{self.goal.current}/{self.goal.target}"


@dataclass(frozen=True)
class AchievementRow:
    achievement: Achievement
    unlocked: bool


@dataclass(frozen=True)
class ActivityDay:
    day: str
    count: int

    @property
    def intensity(self) -> int:
        # 0..3 buckets for the heat map shading.
        if self.count <= 0:
            return 0
        if self.count > 4:
            return 3
        if self.count > 2:
            return 2
        return 1


@dataclass(frozen=True)
class StatsSummary:
    streak: int
    total_completed: int
    goals_completed: int
    level: int
    activity: tuple[ActivityDay, ...]


def header_summary(state: ProgressState) -> LevelProgress:
    return level_progress(state.xp)


def quest_cards(state: ProgressState, day: date) -> list[QuestCard]:
    return [
        QuestCard(quest=quest, progress=state.dailies.get(quest.id, 0))
        for quest in quests_for_day(day, state.custom_quests)
    ]


def goal_rows(state: ProgressState) -> list[GoalRow]:
    return [GoalRow(goal=goal) for goal in state.goals]


def achievement_rows(state: ProgressState) -> list[AchievementRow]:
    unlocked = set(state.unlocked_achievements)
    return [AchievementRow(achievement=a, unlocked=a.id in unlocked) for a in ACHIEVEMENTS]


def activity_grid(history: dict[str, int], today: date, days: int = ACTIVITY_DAYS) -> list[ActivityDay]:
    start = today - timedelta(days=days - 1)
    out: list[ActivityDay] = []
    for offset in range(days):
        key = day_key(start + timedelta(days=offset))
        out.append(ActivityDay(day=key, count=history.get(key, 0)))
    return out


def stats_summary(state: ProgressState, today: date) -> StatsSummary:
    return StatsSummary(
        streak=state.current_streak,
        total_completed=state.total_completed,
        goals_completed=state.goals_completed,
        level=level_progress(state.xp).level,
        activity=tuple(activity_grid(state.history, today)),
    )
