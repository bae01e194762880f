"""Mode manager holding the single active mode."""

from __future__ import annotations

from typing import Dict, Type, Union

from modal_engine.actions import Action, ModeName
from modal_engine.keys import Key
from modal_engine.runtime import telemetry

from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode

EditorMode = Union[NormalMode, InsertMode, CommandMode]

MODE_TYPES: Dict[str, Type[EditorMode]] = {
    "normal": NormalMode,
    "insert": InsertMode,
    "command": CommandMode,
}


class ModeManager:
    """Owns the active mode, performs transitions and dispatches keys.

    Every switch builds a fresh mode instance, so pending keys and typed
    command text never survive a mode change.
    """

    def __init__(self, initial: ModeName = "normal") -> None:
        self._active: EditorMode = self._build(initial)

    @property
    def active_mode(self) -> EditorMode:
        return self._active

    @property
    def description(self) -> str:
        return self._active.description

    def switch_mode(self, name: str) -> EditorMode:
        previous = self._active.name
        self._active = self._build(name)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous, "mode": name},
            logger_name="modal_engine.modes",
        )
        return self._active

    def handle_key(self, key: Key) -> Action:
        mode = self._active
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            logger_name="modal_engine.modes",
            metadata={"key": key.char or key.kind.value, "mode": mode.name},
        ):
            return mode.handle_key(key)

    @staticmethod
    def _build(name: str) -> EditorMode:
        try:
            mode_cls = MODE_TYPES[name]
        except KeyError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc
        return mode_cls()
