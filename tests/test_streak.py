from __future__ import annotations

from datetime import date

from devquests.core.streak import compute_streak, day_key, parse_day_key


def test_streak_skips_empty_today() -> None:
    history = {"2024-01-01": 1, "2024-01-02": 1, "2024-01-03": 0}
    assert compute_streak(history, date(2024, 1, 3)) == 2


def test_streak_breaks_on_gap_before_today() -> None:
    history = {"2024-01-01": 1, "2024-01-02": 0, "2024-01-03": 1}
    assert compute_streak(history, date(2024, 1, 3)) == 1


def test_streak_is_zero_when_yesterday_and_today_are_empty() -> None:
    history = {"2024-01-01": 3, "2024-01-02": 0, "2024-01-03": 0}
    assert compute_streak(history, date(2024, 1, 3)) == 0


def test_streak_counts_prior_days_without_today_entry() -> None:
    history = {"2024-01-01": 1, "2024-01-02": 2}
    assert compute_streak(history, date(2024, 1, 3)) == 2


def test_streak_crosses_month_and_leap_day() -> None:
    history = {"2024-02-28": 1, "2024-02-29": 1, "2024-03-01": 1}
    assert compute_streak(history, date(2024, 3, 1)) == 3


def test_streak_empty_history() -> None:
    assert compute_streak({}, date(2024, 1, 3)) == 0


def test_day_key_round_trip() -> None:
    assert day_key(date(2024, 1, 3)) == "2024-01-03"
    assert parse_day_key("2024-01-03") == date(2024, 1, 3)
    assert parse_day_key("03/01/2024") is None
