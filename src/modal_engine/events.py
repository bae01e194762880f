"""Minimal event bus the engine uses to publish intents to its host."""

from __future__ import annotations

from typing import Callable, Dict

SAVE_REQUESTED = "engine.save"
EXIT_REQUESTED = "engine.exit"
MODE_CHANGED = "engine.mode"
TEXT_YANKED = "engine.yank"


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        """Call every subscriber, then re-raise the first failure, if any.

        A failing subscriber never hides the event from the ones after it.
        """

        first_error: Exception | None = None
        for callback in list(self._subscribers.get(event, [])):
            try:
                callback(payload)
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error


__all__ = [
    "EventBus",
    "SAVE_REQUESTED",
    "EXIT_REQUESTED",
    "MODE_CHANGED",
    "TEXT_YANKED",
]
