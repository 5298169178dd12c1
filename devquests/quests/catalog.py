"""Built-in daily quests, weekday quests and custom quest definitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any


DEFAULT_CUSTOM_XP = 20
DEFAULT_CUSTOM_DESCRIPTION = "Custom quest"


class QuestKind(str, Enum):
    BOOLEAN = "boolean"
    COUNTER = "counter"


@dataclass(frozen=True)
class Quest:
    id: str
    title: str
    kind: QuestKind
    xp_per: int
    max_progress: int = 1
    description: str = ""
    icon: str = "star"
    custom: bool = False

    @property
    def max(self) -> int:
        if self.kind is QuestKind.BOOLEAN:
            return 1
        return self.max_progress

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "kind": self.kind.value,
            "xp_per": self.xp_per,
            "max_progress": self.max,
            "description": self.description,
            "icon": self.icon,
            "custom": self.custom,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> Quest | None:
        if not isinstance(payload, dict):
            return None
        try:
            kind = QuestKind(payload.get("kind", QuestKind.BOOLEAN.value))
            quest = cls(
                id=str(payload["id"]),
                title=str(payload["title"]),
                kind=kind,
                xp_per=int(payload.get("xp_per", DEFAULT_CUSTOM_XP)),
                max_progress=int(payload.get("max_progress", 1)),
                description=str(payload.get("description", "")),
                icon=str(payload.get("icon", "star")),
                custom=bool(payload.get("custom", False)),
            )
        except (KeyError, TypeError, ValueError):
            return None
        if quest.max < 1:
            return None
        return quest


DAILY_QUEST_TEMPLATES: tuple[Quest, ...] = (
    Quest(
        id="leetcode",
        title="Solve LeetCode Problems",
        kind=QuestKind.COUNTER,
        max_progress=5,
        xp_per=15,
        icon="code",
        description="Keep those algorithms sharp. 1-5 questions.",
    ),
    Quest(
        id="commit",
        title="Make a GitHub Commit",
        kind=QuestKind.BOOLEAN,
        xp_per=25,
        icon="git-commit",
        description="Push some code to keep the streak alive.",
    ),
    Quest(
        id="article",
        title="Read Tech Docs/Article",
        kind=QuestKind.BOOLEAN,
        xp_per=20,
        icon="book-open",
        description="Learn something new today.",
    ),
)

PITCH_QUEST = Quest(
    id="pitch",
    title="Pitch a Local Business",
    kind=QuestKind.BOOLEAN,
    xp_per=50,
    icon="briefcase",
    description="Reach out and offer to build a website.",
)

# Monday..Thursday, date.weekday() numbering.
PITCH_WEEKDAYS = range(0, 4)


def quests_for_day(day: date, custom_quests: list[Quest] | tuple[Quest, ...] = ()) -> list[Quest]:
    quests = list(DAILY_QUEST_TEMPLATES)
    if day.weekday() in PITCH_WEEKDAYS:
        quests.insert(1, PITCH_QUEST)
    quests.extend(custom_quests)
    return quests


def build_custom_quest(
    *,
    title: str,
    kind: QuestKind = QuestKind.BOOLEAN,
    max_progress: int = 1,
    xp_per: int = DEFAULT_CUSTOM_XP,
    description: str = "",
) -> Quest:
    clean_title = title.strip()
    if not clean_title:
        raise ValueError("Quest title must not be empty")
    if kind is QuestKind.COUNTER and max_progress < 1:
        raise ValueError("Counter quests need a maximum of at least 1")
    if xp_per < 1:
        raise ValueError("Quest XP must be a positive number")
    return Quest(
        id="",
        title=clean_title,
        kind=kind,
        xp_per=xp_per,
        max_progress=max_progress if kind is QuestKind.COUNTER else 1,
        description=description.strip() or DEFAULT_CUSTOM_DESCRIPTION,
        icon="star",
        custom=True,
    )


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Code is like humor. When you have to explain it, it's bad.", "Cory House"),
    Quote("First, solve the problem. Then, write the code.", "John Johnson"),
    Quote("Experience is the name everyone gives to their mistakes.", "Oscar Wilde"),
    Quote("In order to be irreplaceable, one must always be different.", "Coco Chanel"),
    Quote("The best error message is the one that never shows up.", "Thomas Fuchs"),
    Quote("Simplicity is the soul of efficiency.", "Austin Freeman"),
    Quote("Make it work, make it right, make it fast.", "Kent Beck"),
    Quote(
        "Any fool can write code that a computer can understand. "
        "Good programmers write code that humans can understand.",
        "Martin Fowler",
    ),
    Quote("Talk is cheap. Show me the code.", "Linus Torvalds"),
)


def quote_for_day(day: date) -> Quote:
    return QUOTES[day.day % len(QUOTES)]
