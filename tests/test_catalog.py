from __future__ import annotations

from datetime import date

import pytest

from devquests.quests.catalog import (
    PITCH_QUEST,
    QUOTES,
    Quest,
    QuestKind,
    build_custom_quest,
    quests_for_day,
    quote_for_day,
)


def test_pitch_quest_only_monday_to_thursday() -> None:
    monday = quests_for_day(date(2024, 1, 1))
    assert [q.id for q in monday] == ["leetcode", "pitch", "commit", "article"]

    thursday = quests_for_day(date(2024, 1, 4))
    assert PITCH_QUEST in thursday

    for weekend_day in (date(2024, 1, 5), date(2024, 1, 6), date(2024, 1, 7)):
        assert PITCH_QUEST not in quests_for_day(weekend_day)


def test_custom_quests_come_last() -> None:
    custom = Quest(id="q1", title="Stretch", kind=QuestKind.BOOLEAN, xp_per=20, custom=True)
    quests = quests_for_day(date(2024, 1, 6), [custom])
    assert quests[-1] == custom
    assert len(quests) == 4


def test_build_custom_quest_defaults_and_validation() -> None:
    quest = build_custom_quest(title="  Meditate  ")
    assert quest.title == "Meditate"
    assert quest.kind is QuestKind.BOOLEAN
    assert quest.max == 1
    assert quest.xp_per == 20
    assert quest.description == "Custom quest"
    assert quest.custom is True

    boolean = build_custom_quest(title="Walk", max_progress=9)
    assert boolean.max == 1

    counter = build_custom_quest(title="Pushups", kind=QuestKind.COUNTER, max_progress=4, xp_per=5)
    assert counter.max == 4

    with pytest.raises(ValueError):
        build_custom_quest(title="   ")
    with pytest.raises(ValueError):
        build_custom_quest(title="Pushups", kind=QuestKind.COUNTER, max_progress=0)
    with pytest.raises(ValueError):
        build_custom_quest(title="Free", xp_per=0)


def test_quest_from_dict_rejects_malformed_records() -> None:
    assert Quest.from_dict({"id": "x", "title": "T", "kind": "slider"}) is None
    assert Quest.from_dict({"title": "No id"}) is None
    assert Quest.from_dict(["x"]) is None
    assert Quest.from_dict({"id": "x", "title": "T", "kind": "counter", "max_progress": 0}) is None

    quest = Quest.from_dict({"id": "x", "title": "T", "kind": "counter", "max_progress": 3, "xp_per": 7})
    assert quest is not None
    assert quest.max == 3
    assert quest.xp_per == 7


def test_quote_rotates_with_day_of_month() -> None:
    assert quote_for_day(date(2024, 1, 3)) == QUOTES[3]
    assert quote_for_day(date(2024, 1, 10)) == QUOTES[0]
