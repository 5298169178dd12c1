"""Daily streak computation over the completion history."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Mapping


DAY_FORMAT = "%Y-%m-%d"


def day_key(day: date) -> str:
    return day.strftime(DAY_FORMAT)


def parse_day_key(value: str) -> date | None:
    try:
        return datetime.strptime(value, DAY_FORMAT).date()
    except (TypeError, ValueError):
        return None


def compute_streak(history: Mapping[str, int], today: date) -> int:
    """Count consecutive active days ending today.

    Today without activity is skipped once so an in-progress day does not
    reset the streak; any other empty day ends it.
    """
    count = 0
    cursor = today
    while True:
        if history.get(day_key(cursor), 0) > 0:
            count += 1
            cursor -= timedelta(days=1)
            continue
        if count == 0 and cursor == today:
            cursor -= timedelta(days=1)
            continue
        return count
