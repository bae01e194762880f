"""Minimal Textual adapter that wires EditorEngine state into UI callbacks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from modal_engine.buffer import BufferMirror, EditorHost, SaveRequest
from modal_engine.engine import EditorEngine
from modal_engine.events import (
    EXIT_REQUESTED,
    MODE_CHANGED,
    SAVE_REQUESTED,
    TEXT_YANKED,
)
from modal_engine.keys import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    ENTER,
    ESCAPE,
    Key,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


NAMED_KEYS: Dict[str, Key] = {
    "up": ARROW_UP,
    "down": ARROW_DOWN,
    "left": ARROW_LEFT,
    "right": ARROW_RIGHT,
    "enter": ENTER,
    "return": ENTER,
    "escape": ESCAPE,
    "backspace": BACKSPACE,
}

_FUNCTION_KEY = re.compile(r"^f(\d{1,2})$")


def textual_key_to_key(name: str, character: Optional[str] = None) -> Optional[Key]:
    """Map a Textual key name (plus its printable character) to a neutral Key."""

    lowered = name.lower()
    if lowered in NAMED_KEYS:
        return NAMED_KEYS[lowered]
    match = _FUNCTION_KEY.match(lowered)
    if match:
        return Key.function(int(match.group(1)))
    if character and len(character) == 1 and character.isprintable():
        return Key.printable(character)
    if len(name) == 1 and name.isprintable():
        return Key.printable(name)
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges EditorEngine + bus events to a Textual-friendly surface."""

    RELAYED_EVENTS = (SAVE_REQUESTED, EXIT_REQUESTED, MODE_CHANGED, TEXT_YANKED)

    def __init__(
        self,
        engine: EditorEngine,
        hooks: TextualUIHooks,
        *,
        host: Optional[EditorHost] = None,
    ) -> None:
        self.engine = engine
        self.hooks = hooks
        self._subscriptions: List[Tuple[str, Callable[[object], None]]] = []
        if host is not None:
            self._bind_host(host)
        self._subscribe_events()
        self._refresh()

    def close(self) -> None:
        """Detach every bus subscription this adapter made."""

        for event, callback in self._subscriptions:
            self.engine.bus.unsubscribe(event, callback)
        self._subscriptions.clear()

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Translate a Textual key event and feed it to the engine.

        Returns ``False`` when the key has no neutral equivalent.
        """

        neutral = textual_key_to_key(key, character)
        if neutral is None:
            self._log_state("ignored ->", key=key)
            return False
        self._log_state("key ->", key=key, character=character)
        self.engine.apply_key(neutral)
        self._refresh()
        return True

    def is_quit_key(self, key: str) -> bool:
        neutral = textual_key_to_key(key)
        return neutral == Key.function(self.engine.config.quit_function_key)

    def _listen(self, event: str, callback: Callable[[object], None]) -> None:
        self.engine.bus.subscribe(event, callback)
        self._subscriptions.append((event, callback))

    def _bind_host(self, host: EditorHost) -> None:
        def save(payload: object | None) -> None:
            if isinstance(payload, SaveRequest):
                host.save(payload)

        self._listen(SAVE_REQUESTED, save)
        self._listen(EXIT_REQUESTED, lambda _payload: host.exit())

    def _subscribe_events(self) -> None:
        for event in self.RELAYED_EVENTS:
            self._listen(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        mirror = self.engine.view()
        self.hooks.update_buffer(mirror)
        self.hooks.update_status(mirror.status)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        engine = self.engine
        return {
            "mode": engine.mode_name,
            "cursor": engine.cursor.as_tuple(),
            "selection": engine.selection is not None,
            "buffer": engine.name,
            "buffer_version": engine.document.version,
        }


__all__ = [
    "NAMED_KEYS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "textual_key_to_key",
]
