"""Insert mode: typed characters go into the document."""

from __future__ import annotations

from modal_engine.actions import (
    NOOP,
    Action,
    AddCharAtCursor,
    DeleteCharAtCursor,
    MoveCursor,
    SplitLine,
    SwitchMode,
)
from modal_engine.keys import Key, KeyKind

from .base_mode import Mode


class InsertMode(Mode):
    name = "insert"

    def handle_key(self, key: Key) -> Action:
        match key.kind:
            case KeyKind.ARROW_UP:
                return MoveCursor(dy=-1)
            case KeyKind.ARROW_DOWN:
                return MoveCursor(dy=1)
            case KeyKind.ARROW_LEFT:
                return MoveCursor(dx=-1)
            case KeyKind.ARROW_RIGHT:
                return MoveCursor(dx=1)
            case KeyKind.ENTER:
                return SplitLine()
            case KeyKind.BACKSPACE:
                return DeleteCharAtCursor()
            case KeyKind.ESCAPE:
                return SwitchMode("normal")
            case KeyKind.PRINTABLE if key.char is not None:
                return AddCharAtCursor(key.char)
        return NOOP

    @property
    def description(self) -> str:
        return "Insert Mode"
