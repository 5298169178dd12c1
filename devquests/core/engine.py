"""Progress engine: quest progress, goals, streaks and achievements."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, Callable
from uuid import uuid4

from devquests.core.achievements import evaluate_achievements
from devquests.core.notifications import (
    Channel,
    NotificationBus,
    StateListener,
    Unsubscribe,
)
from devquests.core.progression import level_for_xp
from devquests.core.state import Goal, ProgressState, parse_goal_target
from devquests.core.streak import compute_streak, day_key
from devquests.quests.catalog import Quest, QuestKind, quests_for_day
from devquests.storage.state_store import JsonStateStore, StateStore


logger = logging.getLogger(__name__)

GOAL_BONUS_XP = 200
LEVEL_UP_DELAY_SEC = 0.3
GOAL_COMPLETE_DELAY_SEC = 0.3
ACHIEVEMENT_DELAY_SEC = 0.5
ACHIEVEMENT_STAGGER_SEC = 0.8


class ProgressEngine:
    """Owns the progress state and applies every mutation to it.

    Each mutating call recomputes the streak, evaluates achievements,
    saves through the store and then publishes the state to subscribers.
    Saving is best effort: a failed save is logged and the in-memory state
    stays authoritative for the session.
    """

    def __init__(
        self,
        store: StateStore | None = None,
        bus: NotificationBus | None = None,
        clock: Callable[[], date] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store: StateStore = store or JsonStateStore()
        self.bus = bus or NotificationBus()
        self._clock = clock or date.today
        self._new_id = id_factory or (lambda: uuid4().hex)
        self.state = ProgressState()

    # Lifecycle ---------------------------------------------------------

    def initialize(self) -> ProgressState:
        payload: dict[str, Any] | None = None
        try:
            payload = self._store.load()
        except Exception as exc:
            logger.warning("Loading saved progress failed, starting fresh: %s", exc)
        self.state = ProgressState.from_dict(payload)

        self._rollover_if_new_day()
        self._commit()
        return self.state

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        return self.bus.subscribe(listener)

    @property
    def today(self) -> date:
        return self._clock()

    # Daily quests ------------------------------------------------------

    def quests_for_today(self) -> list[Quest]:
        return quests_for_day(self.today, self.state.custom_quests)

    def find_quest(self, quest_id: str) -> Quest | None:
        for quest in self.quests_for_today():
            if quest.id == quest_id:
                return quest
        return None

    def complete_quest(self, quest: Quest, change: int | bool) -> None:
        self.update_daily_progress(quest.id, change, quest.xp_per, quest.kind, quest.max)

    def update_daily_progress(
        self,
        quest_id: str,
        change: int | bool,
        xp_per_unit: int,
        kind: QuestKind | str = QuestKind.COUNTER,
        max_progress: int = 1,
    ) -> None:
        try:
            kind = QuestKind(kind)
            xp_per_unit = int(xp_per_unit)
            max_progress = int(max_progress)
            delta = 0 if kind is QuestKind.BOOLEAN else int(change)
        except (TypeError, ValueError):
            logger.warning(
                "Ignoring malformed progress update for %r (change=%r, kind=%r)",
                quest_id,
                change,
                kind,
            )
            return

        self._rollover_if_new_day()
        today = day_key(self.today)
        upper = 1 if kind is QuestKind.BOOLEAN else max_progress
        current = self.state.dailies.get(quest_id, 0)
        if not 0 <= current <= upper:
            logger.warning(
                "Discarding out-of-range progress %r for %r (max %d)", current, quest_id, upper
            )
            current = 0
        xp_gain = 0
        completed_inc = 0

        if kind is QuestKind.BOOLEAN:
            new_progress = 1 if change else 0
            if new_progress == 1 and current == 0:
                xp_gain = xp_per_unit
                completed_inc = 1
            elif new_progress == 0 and current == 1:
                xp_gain = -xp_per_unit
                completed_inc = -1
        else:
            new_progress = max(0, min(max_progress, current + delta))
            xp_gain = (new_progress - current) * xp_per_unit
            if new_progress == max_progress and current < max_progress:
                completed_inc = 1
            elif new_progress < max_progress and current == max_progress:
                completed_inc = -1

        previous_level = level_for_xp(self.state.xp)
        self.state.xp = max(0, self.state.xp + xp_gain)
        self.state.total_completed = max(0, self.state.total_completed + completed_inc)
        self.state.dailies[quest_id] = new_progress
        self.state.history[today] = max(0, self.state.history.get(today, 0) + completed_inc)

        self._commit(previous_level)

    def refresh_day(self) -> bool:
        """Roll over to a new day if the date changed since the last commit.

        Returns True when a rollover happened and subscribers were notified.
        """
        if self.state.last_date == day_key(self.today):
            return False
        self._commit()
        return True

    # Goals -------------------------------------------------------------

    def add_goal(self, title: str, target: int | str) -> Goal | None:
        try:
            parsed_target = parse_goal_target(target)
        except ValueError as exc:
            logger.warning("Ignoring goal %r: %s", title, exc)
            return None
        if not isinstance(title, str) or not title.strip():
            logger.warning("Ignoring goal without a title")
            return None

        goal = Goal(id=self._new_id(), title=title.strip(), target=parsed_target)
        self.state.goals.append(goal)
        self._commit()
        return goal

    def update_goal(self, goal_id: str, delta: int) -> None:
        goal = self.state.find_goal(goal_id)
        if goal is None:
            return
        try:
            delta = int(delta)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed goal delta %r for %s", delta, goal_id)
            return

        new_current = max(0, min(goal.target, goal.current + delta))
        completed_now = new_current == goal.target and goal.current < goal.target
        goal.current = new_current

        previous_level = level_for_xp(self.state.xp)
        if completed_now:
            self.state.xp += GOAL_BONUS_XP
            self.state.goals_completed += 1
            self.bus.defer(
                Channel.GOAL_COMPLETE,
                f"Goal Complete! +{GOAL_BONUS_XP} XP",
                GOAL_COMPLETE_DELAY_SEC,
            )
        self._commit(previous_level)

    def delete_goal(self, goal_id: str) -> None:
        remaining = [goal for goal in self.state.goals if goal.id != goal_id]
        if len(remaining) == len(self.state.goals):
            return
        self.state.goals = remaining
        self._commit()

    # Custom quests -----------------------------------------------------

    def add_custom_quest(self, definition: Quest) -> Quest | None:
        if not definition.title.strip():
            logger.warning("Ignoring custom quest without a title")
            return None
        quest = dataclasses.replace(definition, id=self._new_id(), custom=True)
        self.state.custom_quests.append(quest)
        self._commit()
        return quest

    def delete_custom_quest(self, quest_id: str) -> None:
        remaining = [quest for quest in self.state.custom_quests if quest.id != quest_id]
        if len(remaining) == len(self.state.custom_quests):
            return
        self.state.custom_quests = remaining
        self._commit()

    # Internals ---------------------------------------------------------

    def _rollover_if_new_day(self) -> None:
        today = day_key(self.today)
        if self.state.last_date == today:
            return
        logger.debug("Daily rollover from %r to %s", self.state.last_date, today)
        self.state.last_date = today
        self.state.dailies = {}
        self.state.history.setdefault(today, 0)

    def _commit(self, previous_level: int | None = None) -> None:
        self._rollover_if_new_day()
        self.state.current_streak = compute_streak(self.state.history, self.today)

        if previous_level is not None:
            new_level = level_for_xp(self.state.xp)
            if new_level > previous_level:
                self.bus.defer(Channel.LEVEL_UP, new_level, LEVEL_UP_DELAY_SEC)

        for index, achievement in enumerate(evaluate_achievements(self.state)):
            logger.info("Achievement unlocked: %s", achievement.id)
            self.bus.defer(
                Channel.ACHIEVEMENT_UNLOCKED,
                achievement.name,
                ACHIEVEMENT_DELAY_SEC + index * ACHIEVEMENT_STAGGER_SEC,
            )

        self._save()
        self.bus.publish_state(self.state)

    def _save(self) -> None:
        try:
            saved = self._store.save(self.state.to_dict())
        except Exception as exc:
            logger.warning("Saving progress failed, keeping changes in memory: %s", exc)
            return
        if not saved:
            logger.warning("Progress was not saved, keeping changes in memory")
