"""Terminal CLI entrypoint for DevQuests."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from devquests.core.engine import ProgressEngine
from devquests.core.notifications import Channel, ImmediateScheduler, NotificationBus
from devquests.core.state import parse_goal_target
from devquests.quests.catalog import DEFAULT_CUSTOM_XP, QuestKind, build_custom_quest
from devquests.storage.state_store import JsonStateStore, MemoryStateStore, StateStore
from devquests.ui.dashboard import (
    achievement_rows,
    goal_rows,
    header_summary,
    quest_cards,
    stats_summary,
)

SHORT_ID_LEN = 8
HEAT_GLYPHS = ".:*#"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="DevQuests daily quest tracker")
    parser.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="Progress file (default: ~/.devquests/state.json)",
    )
    parser.add_argument(
        "--ephemeral",
        action="store_true",
        help="Keep progress in memory only, nothing is written to disk",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("status", help="Show level, XP and today's quests")
    sub.add_parser("quests", help="List today's quests")

    done = sub.add_parser("done", help="Mark a quest as completed")
    done.add_argument("quest_id")
    undo = sub.add_parser("undo", help="Reset a quest to not done")
    undo.add_argument("quest_id")
    count = sub.add_parser("count", help="Change a counter quest by DELTA")
    count.add_argument("quest_id")
    count.add_argument("delta", type=int)

    sub.add_parser("goals", help="List long-term goals")
    goal_add = sub.add_parser("goal-add", help="Add a long-term goal")
    goal_add.add_argument("title")
    goal_add.add_argument("target")
    goal_update = sub.add_parser("goal-update", help="Change goal progress by DELTA")
    goal_update.add_argument("goal_id")
    goal_update.add_argument("delta", type=int)
    goal_delete = sub.add_parser("goal-delete", help="Delete a goal")
    goal_delete.add_argument("goal_id")

    quest_add = sub.add_parser("quest-add", help="Add a custom daily quest")
    quest_add.add_argument("title")
    quest_add.add_argument("--counter", action="store_true", help="Counter quest instead of done/not done")
    quest_add.add_argument("--max", type=int, default=1, help="Maximum for counter quests")
    quest_add.add_argument("--xp", type=int, default=DEFAULT_CUSTOM_XP, help="XP per unit")
    quest_add.add_argument("--desc", default="", help="Short description")
    quest_delete = sub.add_parser("quest-delete", help="Delete a custom quest")
    quest_delete.add_argument("quest_id")

    sub.add_parser("achievements", help="List achievements")
    sub.add_parser("stats", help="Show streak, totals and the last 28 days")

    web = sub.add_parser("web", help="Launch the web dashboard (NiceGUI)")
    web.add_argument("--host", default="127.0.0.1", help="Host bind for the dashboard")
    web.add_argument("--port", type=int, default=8089, help="Port for the dashboard")
    return parser


def build_engine(store: StateStore) -> ProgressEngine:
    bus = NotificationBus(scheduler=ImmediateScheduler())
    bus.listen(Channel.LEVEL_UP, lambda level: print(f"*** LEVEL UP! You reached level {level} ***"))
    bus.listen(Channel.ACHIEVEMENT_UNLOCKED, lambda name: print(f"*** Achievement unlocked: {name} ***"))
    bus.listen(Channel.GOAL_COMPLETE, lambda message: print(f"*** {message} ***"))
    return ProgressEngine(store=store, bus=bus)


def _short(item_id: str) -> str:
    return item_id[:SHORT_ID_LEN]


def _resolve(item_id: str, ids: list[str]) -> str | None:
    if item_id in ids:
        return item_id
    matches = [candidate for candidate in ids if candidate.startswith(item_id)]
    if len(matches) == 1:
        return matches[0]
    return None


def print_status(engine: ProgressEngine) -> None:
    header = header_summary(engine.state)
    filled = int(round(header.percent / 5))
    bar = "#" * filled + "-" * (20 - filled)
    print(f"Level {header.level} | {header.xp_total} XP | streak {engine.state.current_streak}d")
    print(
        f"[{bar}] {header.current_level_xp}/{header.required_xp} XP to level {header.next_level}"
    )
    print_quests(engine)


def print_quests(engine: ProgressEngine) -> None:
    for card in quest_cards(engine.state, engine.today):
        mark = "x" if card.done else " "
        quest_id = _short(card.quest.id) if card.quest.custom else card.quest.id
        print(
            f"[{mark}] {quest_id:<10} {card.quest.title:<28} {card.progress_text:>5}"
            f"  +{card.quest.xp_per} XP"
        )


def print_goals(engine: ProgressEngine) -> None:
    rows = goal_rows(engine.state)
    if not rows:
        print("No goals yet")
        return
    for row in rows:
        print(f"{_short(row.goal.id)}  {row.goal.title:<28} {row.progress_text:>9} ({row.percent:.0f}%)")


def print_achievements(engine: ProgressEngine) -> None:
    for row in achievement_rows(engine.state):
        mark = row.achievement.emoji if row.unlocked else "--"
        print(f"{mark:<3} {row.achievement.name:<18} {row.achievement.description}")


def print_stats(engine: ProgressEngine) -> None:
    stats = stats_summary(engine.state, engine.today)
    print(f"Day streak:    {stats.streak}")
    print(f"Quests done:   {stats.total_completed}")
    print(f"Goals done:    {stats.goals_completed}")
    print(f"Current level: {stats.level}")
    grid = "".join(HEAT_GLYPHS[day.intensity] for day in stats.activity)
    for start in range(0, len(grid), 7):
        print(grid[start : start + 7])


def run_command(engine: ProgressEngine, args: argparse.Namespace) -> int:
    command = args.command

    if command in {"done", "undo", "count"}:
        quest = engine.find_quest(args.quest_id) or engine.find_quest(
            _resolve(args.quest_id, [q.id for q in engine.state.custom_quests]) or ""
        )
        if quest is None:
            print(f"Unknown quest: {args.quest_id}")
            return 1
        if command == "count":
            if quest.kind is not QuestKind.COUNTER:
                print(f"{quest.title} is not a counter quest, use done/undo")
                return 1
            engine.complete_quest(quest, args.delta)
        elif quest.kind is QuestKind.BOOLEAN:
            engine.complete_quest(quest, command == "done")
        else:
            engine.complete_quest(quest, quest.max if command == "done" else -quest.max)
        print_quests(engine)
        return 0

    if command == "goal-add":
        try:
            target = parse_goal_target(args.target)
        except ValueError as exc:
            print(f"Invalid goal: {exc}")
            return 1
        if not args.title.strip():
            print("Invalid goal: title must not be empty")
            return 1
        goal = engine.add_goal(args.title, target)
        if goal is not None:
            print(f"Added goal {_short(goal.id)}: {goal.title} (0/{goal.target})")
        return 0

    if command in {"goal-update", "goal-delete"}:
        goal_id = _resolve(args.goal_id, [goal.id for goal in engine.state.goals])
        if goal_id is None:
            print(f"Unknown goal: {args.goal_id}")
            return 1
        if command == "goal-update":
            engine.update_goal(goal_id, args.delta)
        else:
            engine.delete_goal(goal_id)
        print_goals(engine)
        return 0

    if command == "quest-add":
        try:
            definition = build_custom_quest(
                title=args.title,
                kind=QuestKind.COUNTER if args.counter else QuestKind.BOOLEAN,
                max_progress=args.max,
                xp_per=args.xp,
                description=args.desc,
            )
        except ValueError as exc:
            print(f"Invalid quest: {exc}")
            return 1
        quest = engine.add_custom_quest(definition)
        if quest is not None:
            print(f"Added quest {_short(quest.id)}: {quest.title}")
        return 0

    if command == "quest-delete":
        quest_id = _resolve(args.quest_id, [quest.id for quest in engine.state.custom_quests])
        if quest_id is None:
            print(f"Unknown custom quest: {args.quest_id}")
            return 1
        engine.delete_custom_quest(quest_id)
        print_quests(engine)
        return 0

    if command == "quests":
        print_quests(engine)
    elif command == "goals":
        print_goals(engine)
    elif command == "achievements":
        print_achievements(engine)
    elif command == "stats":
        print_stats(engine)
    else:
        print_status(engine)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "web":
        from devquests.ui.web_app import run_web_ui

        return run_web_ui(state_path=args.state_file, host=args.host, port=args.port)

    store: StateStore
    if args.ephemeral:
        store = MemoryStateStore()
    else:
        store = JsonStateStore(args.state_file)

    engine = build_engine(store)
    engine.initialize()
    return run_command(engine, args)


if __name__ == "__main__":
    raise SystemExit(main())
