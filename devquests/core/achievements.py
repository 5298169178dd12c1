"""One-time achievements unlocked from the progress state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from devquests.core.progression import level_for_xp
from devquests.core.state import ProgressState
from devquests.quests.catalog import Quest


@dataclass(frozen=True)
class ProgressSnapshot:
    """Read-only view of the fields achievement conditions look at."""

    xp: int
    total_completed: int
    goals_completed: int
    current_streak: int
    custom_quests: tuple[Quest, ...]

    @classmethod
    def of(cls, state: ProgressState) -> ProgressSnapshot:
        return cls(
            xp=state.xp,
            total_completed=state.total_completed,
            goals_completed=state.goals_completed,
            current_streak=state.current_streak,
            custom_quests=tuple(state.custom_quests),
        )


Condition = Callable[[ProgressSnapshot], bool]


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    emoji: str
    condition: Condition


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first_quest",
        name="Getting Started",
        description="Complete your first quest",
        emoji="🎯",
        condition=lambda s: s.total_completed >= 1,
    ),
    Achievement(
        id="level_5",
        name="Rising Developer",
        description="Reach level 5",
        emoji="⭐",
        condition=lambda s: level_for_xp(s.xp) >= 5,
    ),
    Achievement(
        id="level_10",
        name="Expert Coder",
        description="Reach level 10",
        emoji="💎",
        condition=lambda s: level_for_xp(s.xp) >= 10,
    ),
    Achievement(
        id="streak_7",
        name="Week Warrior",
        description="7 day streak",
        emoji="🔥",
        condition=lambda s: s.current_streak >= 7,
    ),
    Achievement(
        id="streak_30",
        name="Monthly Master",
        description="30 day streak",
        emoji="⚡",
        condition=lambda s: s.current_streak >= 30,
    ),
    Achievement(
        id="complete_10",
        name="Quest Hunter",
        description="Complete 10 quests",
        emoji="🏹",
        condition=lambda s: s.total_completed >= 10,
    ),
    Achievement(
        id="complete_50",
        name="Quest Veteran",
        description="Complete 50 quests",
        emoji="🛡️",
        condition=lambda s: s.total_completed >= 50,
    ),
    Achievement(
        id="complete_100",
        name="Quest Master",
        description="Complete 100 quests",
        emoji="👑",
        condition=lambda s: s.total_completed >= 100,
    ),
    Achievement(
        id="first_goal",
        name="Goal Setter",
        description="Complete your first long-term goal",
        emoji="🎪",
        condition=lambda s: s.goals_completed >= 1,
    ),
    Achievement(
        id="custom_quest",
        name="Self Driven",
        description="Create a custom quest",
        emoji="✨",
        condition=lambda s: len(s.custom_quests) > 0,
    ),
)

_BY_ID = {achievement.id: achievement for achievement in ACHIEVEMENTS}


def achievement_by_id(achievement_id: str) -> Achievement | None:
    return _BY_ID.get(achievement_id)


def evaluate_achievements(
    state: ProgressState,
    achievements: tuple[Achievement, ...] = ACHIEVEMENTS,
) -> list[Achievement]:
    """Record every newly satisfied achievement and return them in table order."""
    snapshot = ProgressSnapshot.of(state)
    unlocked: list[Achievement] = []
    for achievement in achievements:
        if achievement.id in state.unlocked_achievements:
            continue
        if achievement.condition(snapshot):
            state.unlocked_achievements.append(achievement.id)
            unlocked.append(achievement)
    return unlocked
