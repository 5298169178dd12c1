"""Canonical progress state shared by the engine and its listeners."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from devquests.quests.catalog import Quest


@dataclass
class Goal:
    id: str
    title: str
    target: int
    current: int = 0

    @property
    def completed(self) -> bool:
        return self.current >= self.target

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "target": self.target,
            "current": self.current,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> Goal | None:
        if not isinstance(payload, dict):
            return None
        try:
            target = int(payload["target"])
            goal = cls(
                id=str(payload["id"]),
                title=str(payload.get("title", "")),
                target=target,
                current=int(payload.get("current", 0)),
            )
        except (KeyError, TypeError, ValueError):
            return None
        if goal.target <= 0:
            return None
        goal.current = max(0, min(goal.target, goal.current))
        return goal


@dataclass
class ProgressState:
    xp: int = 0
    total_completed: int = 0
    goals_completed: int = 0
    last_date: str = ""
    dailies: dict[str, int] = field(default_factory=dict)
    goals: list[Goal] = field(default_factory=list)
    custom_quests: list[Quest] = field(default_factory=list)
    history: dict[str, int] = field(default_factory=dict)
    unlocked_achievements: list[str] = field(default_factory=list)
    current_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "xp": self.xp,
            "total_completed": self.total_completed,
            "goals_completed": self.goals_completed,
            "last_date": self.last_date,
            "dailies": dict(self.dailies),
            "goals": [goal.to_dict() for goal in self.goals],
            "custom_quests": [quest.to_dict() for quest in self.custom_quests],
            "history": dict(self.history),
            "unlocked_achievements": list(self.unlocked_achievements),
            "current_streak": self.current_streak,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> ProgressState:
        """Merge a persisted record over the defaults.

        Each key is read on its own; a missing or malformed value keeps the
        default for that key and never fails the whole load.
        """
        state = cls()
        if not isinstance(payload, dict):
            return state

        state.xp = _non_negative_int(payload.get("xp"), state.xp)
        state.total_completed = _non_negative_int(
            payload.get("total_completed"), state.total_completed
        )
        state.goals_completed = _non_negative_int(
            payload.get("goals_completed"), state.goals_completed
        )
        state.current_streak = _non_negative_int(
            payload.get("current_streak"), state.current_streak
        )

        last_date = payload.get("last_date")
        if isinstance(last_date, str):
            state.last_date = last_date

        state.dailies = _int_mapping(payload.get("dailies"))
        state.history = _int_mapping(payload.get("history"))

        goals = payload.get("goals")
        if isinstance(goals, list):
            state.goals = [g for g in (Goal.from_dict(item) for item in goals) if g is not None]

        quests = payload.get("custom_quests")
        if isinstance(quests, list):
            state.custom_quests = [
                q for q in (Quest.from_dict(item) for item in quests) if q is not None
            ]

        unlocked = payload.get("unlocked_achievements")
        if isinstance(unlocked, list):
            seen: list[str] = []
            for item in unlocked:
                if isinstance(item, str) and item not in seen:
                    seen.append(item)
            state.unlocked_achievements = seen

        return state

    def find_goal(self, goal_id: str) -> Goal | None:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        return None


def parse_goal_target(value: Any) -> int:
    """Validate a goal target given as an int or a string of digits."""
    if isinstance(value, bool):
        raise ValueError("Goal target must be a whole number")
    if isinstance(value, str):
        value = value.strip()
        if not value.lstrip("+").isdigit():
            raise ValueError(f"Goal target must be a whole number, got {value!r}")
    elif not isinstance(value, int):
        raise ValueError(f"Goal target must be a whole number, got {value!r}")
    target = int(value)
    if target <= 0:
        raise ValueError("Goal target must be greater than zero")
    return target


def _non_negative_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(0, int(value))


def _int_mapping(value: Any) -> dict[str, int]:
    if not isinstance(value, dict):
        return {}
    out: dict[str, int] = {}
    for key, raw in value.items():
        if isinstance(raw, bool):
            out[str(key)] = int(raw)
        elif isinstance(raw, (int, float)):
            out[str(key)] = max(0, int(raw))
    return out
