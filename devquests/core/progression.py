"""Experience to level arithmetic."""

from __future__ import annotations

import math
from dataclasses import dataclass


BASE_XP = 100


@dataclass(frozen=True)
class LevelProgress:
    level: int
    xp_total: int
    current_level_xp: int
    required_xp: int
    percent: float

    @property
    def next_level(self) -> int:
        return self.level + 1


def level_for_xp(xp: int) -> int:
    return math.floor(math.sqrt(max(0, xp) / BASE_XP)) + 1


def xp_threshold_for_level(level: int) -> int:
    """XP at which ``level`` is finished and ``level + 1`` begins."""
    level = max(0, level)
    return level * level * BASE_XP


def level_progress(xp: int) -> LevelProgress:
    xp = max(0, xp)
    level = level_for_xp(xp)
    floor_xp = xp_threshold_for_level(level - 1)
    required = xp_threshold_for_level(level) - floor_xp
    current = xp - floor_xp
    percent = min(100.0, max(0.0, (current / required) * 100.0)) if required > 0 else 0.0
    return LevelProgress(
        level=level,
        xp_total=xp,
        current_level_xp=current,
        required_xp=required,
        percent=percent,
    )
