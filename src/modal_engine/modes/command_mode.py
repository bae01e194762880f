"""Command-line mode entered with ``:``."""

from __future__ import annotations

from typing import List

from modal_engine.actions import NOOP, Action, submit_command_line
from modal_engine.keys import Key, KeyKind

from .base_mode import Mode


class CommandMode(Mode):
    name = "command"

    def __init__(self) -> None:
        self._typed: List[str] = []

    @property
    def current_command(self) -> str:
        return "".join(self._typed)

    def handle_key(self, key: Key) -> Action:
        match key.kind:
            case KeyKind.ENTER:
                command = self.current_command
                self._typed.clear()
                return submit_command_line(command)
            case KeyKind.BACKSPACE:
                if self._typed:
                    self._typed.pop()
                return NOOP
            case KeyKind.ESCAPE:
                # Escape neither clears the line nor leaves command mode.
                return NOOP
            case KeyKind.PRINTABLE if key.char is not None:
                self._typed.append(key.char)
                return NOOP
        return NOOP

    @property
    def description(self) -> str:
        return f"Command: {self.current_command}"
