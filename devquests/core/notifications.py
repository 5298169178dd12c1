"""State-change subscriptions and deferred side-channel notifications."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Protocol

from devquests.core.state import ProgressState


logger = logging.getLogger(__name__)

StateListener = Callable[[ProgressState], None]
ChannelCallback = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class Channel(str, Enum):
    LEVEL_UP = "level_up"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    GOAL_COMPLETE = "goal_complete"


class Scheduler(Protocol):
    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> None: ...


class ImmediateScheduler:
    """Runs deferred callbacks right away, for terminal use and tests."""

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> None:
        callback()


class LoopScheduler:
    """Defers callbacks on the running asyncio loop."""

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            callback()
            return
        loop.call_later(max(0.0, delay_sec), callback)


class _Registration:
    __slots__ = ("callback",)

    def __init__(self, callback: Callable[[Any], None]) -> None:
        self.callback = callback


class NotificationBus:
    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._scheduler: Scheduler = scheduler or LoopScheduler()
        self._state_listeners: list[_Registration] = []
        self._channel_listeners: dict[Channel, list[_Registration]] = {
            channel: [] for channel in Channel
        }

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        return self._register(self._state_listeners, listener)

    def listen(self, channel: Channel, callback: ChannelCallback) -> Unsubscribe:
        return self._register(self._channel_listeners[channel], callback)

    def publish_state(self, state: ProgressState) -> None:
        self._dispatch(list(self._state_listeners), state, "state")

    def defer(self, channel: Channel, payload: Any, delay_sec: float) -> None:
        def _deliver() -> None:
            self._dispatch(list(self._channel_listeners[channel]), payload, channel.value)

        self._scheduler.call_later(delay_sec, _deliver)

    @staticmethod
    def _register(bucket: list[_Registration], callback: Callable[[Any], None]) -> Unsubscribe:
        handle = _Registration(callback)
        bucket.append(handle)

        def _unsubscribe() -> None:
            for index, item in enumerate(bucket):
                if item is handle:
                    del bucket[index]
                    return

        return _unsubscribe

    @staticmethod
    def _dispatch(registrations: list[_Registration], payload: Any, label: str) -> None:
        for registration in registrations:
            try:
                registration.callback(payload)
            except Exception:
                logger.exception("Listener failed for %s notification", label)
