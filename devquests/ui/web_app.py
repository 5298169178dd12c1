"""NiceGUI web dashboard for DevQuests."""

from __future__ import annotations

from pathlib import Path

from nicegui import ui

from devquests.core.engine import ProgressEngine
from devquests.core.notifications import Channel, LoopScheduler, NotificationBus
from devquests.core.state import ProgressState, parse_goal_target
from devquests.quests.catalog import QuestKind, build_custom_quest, quote_for_day
from devquests.storage.state_store import JsonStateStore
from devquests.ui.dashboard import (
    QuestCard,
    achievement_rows,
    goal_rows,
    header_summary,
    quest_cards,
    stats_summary,
)

POPUP_POLL_SEC = 0.5
DAY_CHECK_SEC = 60.0
HEAT_COLORS = ("#1e293b", "#155e75", "#0891b2", "#22d3ee")


def run_web_ui(
    *,
    state_path: Path | None = None,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    bus = NotificationBus(scheduler=LoopScheduler())
    engine = ProgressEngine(store=JsonStateStore(state_path), bus=bus)

    # Deferred notifications arrive outside any client context, so they are
    # queued here and shown from the page timer.
    popups: list[tuple[str, str]] = []
    bus.listen(Channel.LEVEL_UP, lambda level: popups.append((f"LEVEL UP! Level {level}", "positive")))
    bus.listen(Channel.ACHIEVEMENT_UNLOCKED, lambda name: popups.append((f"Achievement: {name}", "primary")))
    bus.listen(Channel.GOAL_COMPLETE, lambda message: popups.append((message, "positive")))

    engine.initialize()

    ui.add_head_html(
        """
        <style>
          body { background: #0b1220; color: #e5e7eb; font-family: Arial, "Segoe UI", sans-serif; }
          .dq-card { background: #0f1b35; border: 1px solid rgba(148,163,184,.22); border-radius: 14px; }
          .dq-muted { color: #9caecf; }
          .dq-heat { width: 22px; height: 22px; border-radius: 4px; }
        </style>
        """
    )

    with ui.column().classes("w-full gap-1"):
        ui.label("DEV QUESTS").classes("text-xl font-semibold tracking-wide")
        with ui.row().classes("w-full items-center gap-4"):
            level_label = ui.label("Level 1").classes("text-lg font-bold")
            xp_total_label = ui.label("0 XP").classes("dq-muted")
        xp_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")
        with ui.row().classes("w-full justify-between"):
            current_xp_label = ui.label("0 XP").classes("text-sm dq-muted")
            next_level_label = ui.label("100 XP TO LVL 2").classes("text-sm dq-muted")

    with ui.tabs().classes("w-full") as tabs:
        dailies_tab = ui.tab("Dailies")
        goals_tab = ui.tab("Goals")
        achievements_tab = ui.tab("Achievements")
        stats_tab = ui.tab("Stats")

    def on_quest_toggle(card: QuestCard, value: bool) -> None:
        engine.complete_quest(card.quest, value)

    def on_quest_step(card: QuestCard, delta: int) -> None:
        engine.complete_quest(card.quest, delta)

    @ui.refreshable
    def render_dailies() -> None:
        quote = quote_for_day(engine.today)
        with ui.card().classes("w-full dq-card"):
            ui.label(f'"{quote.text}"').classes("italic")
            ui.label(f"- {quote.author}").classes("text-sm dq-muted")
        for card in quest_cards(engine.state, engine.today):
            with ui.card().classes("w-full dq-card"):
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.column().classes("gap-0"):
                        ui.label(card.quest.title).classes("font-semibold")
                        ui.label(card.quest.description).classes("text-sm dq-muted")
                    with ui.row().classes("items-center gap-2"):
                        ui.label(f"+{card.quest.xp_per} XP").classes("text-sm dq-muted")
                        if card.quest.kind is QuestKind.BOOLEAN:
                            ui.checkbox(
                                value=card.done,
                                on_change=lambda e, c=card: on_quest_toggle(c, bool(e.value)),
                            )
                        else:
                            ui.button("-", on_click=lambda c=card: on_quest_step(c, -1)).props("flat")
                            ui.label(card.progress_text)
                            ui.button("+", on_click=lambda c=card: on_quest_step(c, 1)).props("flat")
                        if card.quest.custom:
                            ui.button(
                                "Delete",
                                on_click=lambda c=card: engine.delete_custom_quest(c.quest.id),
                            ).props("flat color=negative")

        with ui.expansion("Add custom quest").classes("w-full dq-card"):
            with ui.row().classes("w-full items-end gap-2"):
                title_input = ui.input("Title")
                kind_select = ui.select(["boolean", "counter"], value="boolean", label="Type")
                max_input = ui.number("Max", value=1, min=1, max=100)
                xp_input = ui.number("XP", value=20, min=1, max=500)
                desc_input = ui.input("Description")

                def on_add_quest() -> None:
                    try:
                        definition = build_custom_quest(
                            title=str(title_input.value or ""),
                            kind=QuestKind(str(kind_select.value or "boolean")),
                            max_progress=int(max_input.value or 1),
                            xp_per=int(xp_input.value or 20),
                            description=str(desc_input.value or ""),
                        )
                    except ValueError as exc:
                        ui.notify(str(exc), color="negative")
                        return
                    engine.add_custom_quest(definition)

                ui.button("Add quest", on_click=on_add_quest)

    @ui.refreshable
    def render_goals() -> None:
        with ui.row().classes("w-full items-end gap-2"):
            goal_title = ui.input("Goal")
            goal_target = ui.number("Target", value=10, min=1)

            def on_add_goal() -> None:
                title = str(goal_title.value or "").strip()
                if not title:
                    ui.notify("Please enter a goal title", color="negative")
                    return
                try:
                    target = parse_goal_target(int(goal_target.value or 0))
                except ValueError as exc:
                    ui.notify(str(exc), color="negative")
                    return
                engine.add_goal(title, target)

            ui.button("Add goal", on_click=on_add_goal)

        rows = goal_rows(engine.state)
        if not rows:
            ui.label("No goals yet. Set a long-term target to work toward.").classes("dq-muted")
        for row in rows:
            with ui.card().classes("w-full dq-card"):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label(row.goal.title).classes("font-semibold")
                    ui.label(row.progress_text).classes("dq-muted")
                ui.linear_progress(value=row.percent / 100.0, show_value=False)
                with ui.row().classes("gap-2"):
                    ui.button("-1", on_click=lambda r=row: engine.update_goal(r.goal.id, -1)).props("flat")
                    ui.button("+1", on_click=lambda r=row: engine.update_goal(r.goal.id, 1)).props("flat")
                    ui.button(
                        "Delete", on_click=lambda r=row: engine.delete_goal(r.goal.id)
                    ).props("flat color=negative")

    @ui.refreshable
    def render_achievements() -> None:
        with ui.grid().classes("w-full grid-cols-1 md:grid-cols-2 gap-2"):
            for row in achievement_rows(engine.state):
                opacity = "1" if row.unlocked else "0.35"
                with ui.card().classes("dq-card").style(f"opacity: {opacity}"):
                    ui.label(f"{row.achievement.emoji} {row.achievement.name}").classes("font-semibold")
                    ui.label(row.achievement.description).classes("text-sm dq-muted")

    @ui.refreshable
    def render_stats() -> None:
        stats = stats_summary(engine.state, engine.today)
        with ui.grid().classes("w-full grid-cols-2 md:grid-cols-4 gap-2"):
            for label, value in (
                ("Day Streak", stats.streak),
                ("Quests Done", stats.total_completed),
                ("Goals Done", stats.goals_completed),
                ("Current Level", stats.level),
            ):
                with ui.card().classes("dq-card"):
                    ui.label(str(value)).classes("text-2xl font-bold")
                    ui.label(label).classes("text-sm dq-muted")
        ui.label("Last 28 days").classes("text-sm dq-muted")
        with ui.grid(columns=7).classes("gap-1"):
            for day in stats.activity:
                ui.element("div").classes("dq-heat").style(
                    f"background: {HEAT_COLORS[day.intensity]}"
                ).tooltip(f"{day.day}: {day.count}")

    with ui.tab_panels(tabs, value=dailies_tab).classes("w-full bg-transparent"):
        with ui.tab_panel(dailies_tab):
            render_dailies()
        with ui.tab_panel(goals_tab):
            render_goals()
        with ui.tab_panel(achievements_tab):
            render_achievements()
        with ui.tab_panel(stats_tab):
            render_stats()

    def refresh_header(state: ProgressState) -> None:
        header = header_summary(state)
        level_label.text = f"Level {header.level}"
        xp_total_label.text = f"{header.xp_total} XP"
        xp_bar.value = header.percent / 100.0
        current_xp_label.text = f"{header.current_level_xp} XP"
        next_level_label.text = f"{header.required_xp} XP TO LVL {header.next_level}"

    def on_state_changed(state: ProgressState) -> None:
        refresh_header(state)
        render_dailies.refresh()
        render_goals.refresh()
        render_achievements.refresh()
        render_stats.refresh()

    def flush_popups() -> None:
        while popups:
            message, color = popups.pop(0)
            ui.notify(message, color=color)

    refresh_header(engine.state)
    engine.subscribe(on_state_changed)
    ui.timer(POPUP_POLL_SEC, flush_popups)
    ui.timer(DAY_CHECK_SEC, engine.refresh_day)
    ui.run(host=host, port=port, reload=False, title="DevQuests")
    return 0
