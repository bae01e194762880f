"""Normal mode: navigation, selection, yank/put and multi-key commands.

Most keys map straight to an action through ``NORMAL_BINDINGS``. ``r``, ``f``,
``F`` and the digits instead open a buffering session: the following keys are
collected and handed to the session's resolver until it reports that it is
done. ``;`` runs the last resolver again over the keys it last saw.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from modal_engine.actions import (
    NOOP,
    AbortCurrentAction,
    Action,
    AddCharAtCursor,
    ApplyMotion,
    CompositeAction,
    DeleteCharAtCursor,
    JumpToLine,
    MoveCursor,
    MoveCursorDown,
    MoveToLineEnd,
    MoveToLineStart,
    Put,
    SplitLine,
    SwitchMode,
    ToggleSelection,
    Undo,
    Yank,
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
    KeyKind,
)
from modal_engine.motion import CharacterFind, Direction, WordMotion

from .base_mode import Mode


class BufferingMode(str, Enum):
    REPLACE = "replace"
    FORWARD = "forward"
    BACKWARD = "backward"
    NUMBER = "number"


def _char(value: str) -> Key:
    return Key.printable(value)


NORMAL_BINDINGS: Dict[Key, Action] = {
    _char("h"): MoveCursor(dx=-1),
    ARROW_LEFT: MoveCursor(dx=-1),
    BACKSPACE: MoveCursor(dx=-1),
    _char("l"): MoveCursor(dx=1),
    ARROW_RIGHT: MoveCursor(dx=1),
    _char("j"): MoveCursor(dy=1),
    ARROW_DOWN: MoveCursor(dy=1),
    _char("k"): MoveCursor(dy=-1),
    ARROW_UP: MoveCursor(dy=-1),
    ENTER: MoveCursorDown(),
    ESCAPE: AbortCurrentAction(),
    _char("i"): SwitchMode("insert"),
    # Open a line below / above and start typing in it.
    _char("o"): CompositeAction.of(MoveToLineEnd(), SplitLine(), SwitchMode("insert")),
    _char("O"): CompositeAction.of(
        MoveToLineStart(), SplitLine(), MoveCursor(dy=-1), SwitchMode("insert")
    ),
    _char("w"): ApplyMotion(WordMotion(1)),
    _char("b"): ApplyMotion(WordMotion(-1)),
    _char(":"): SwitchMode("command"),
    _char("v"): ToggleSelection(),
    _char("y"): Yank(),
    _char("u"): Undo(),
    _char("p"): Put(),
    # Delete is "delete before cursor", so step right first.
    _char("x"): CompositeAction.of(MoveCursor(dx=1), DeleteCharAtCursor()),
}

BUFFERING_STARTERS: Dict[Key, BufferingMode] = {
    _char("r"): BufferingMode.REPLACE,
    _char("f"): BufferingMode.FORWARD,
    _char("F"): BufferingMode.BACKWARD,
}

REPEAT_KEY = _char(";")


def resolve_buffered(mode: BufferingMode, buffer: List[Key]) -> Tuple[Action, bool]:
    """Return the action for the newest buffered key and whether the session ends."""

    key = buffer[-1]
    if key.kind is not KeyKind.PRINTABLE or key.char is None:
        return NOOP, True

    if mode is BufferingMode.REPLACE:
        return (
            CompositeAction.of(
                MoveCursor(dx=1),
                DeleteCharAtCursor(),
                AddCharAtCursor(key.char),
                MoveCursor(dx=-1),
            ),
            True,
        )
    if mode is BufferingMode.FORWARD:
        return ApplyMotion(CharacterFind(Direction.FORWARD, key.char)), True
    if mode is BufferingMode.BACKWARD:
        return ApplyMotion(CharacterFind(Direction.BACKWARD, key.char)), True

    if key.is_digit:
        return NOOP, False
    if key.char == "G":
        digits = "".join(k.char or "" for k in buffer[:-1])
        if digits.isdigit():
            return JumpToLine(int(digits)), True
    return NOOP, True


class NormalMode(Mode):
    name = "normal"

    def __init__(self) -> None:
        self._buffering = False
        self._buffering_mode: Optional[BufferingMode] = None
        self._buffer: List[Key] = []

    @property
    def is_buffering(self) -> bool:
        return self._buffering

    @property
    def buffering_mode(self) -> Optional[BufferingMode]:
        return self._buffering_mode

    def handle_key(self, key: Key) -> Action:
        if self._buffering and self._buffering_mode is not None:
            self._buffer.append(key)
            action, finished = resolve_buffered(self._buffering_mode, self._buffer)
            if finished:
                self._buffering = False
            return action

        if key == REPEAT_KEY:
            return self._repeat_last()

        starter = BUFFERING_STARTERS.get(key)
        if starter is not None:
            self._start_buffering(starter)
            return NOOP

        if key.is_digit:
            self._start_buffering(BufferingMode.NUMBER)
            self._buffer.append(key)
            return NOOP

        return NORMAL_BINDINGS.get(key, NOOP)

    def _start_buffering(self, mode: BufferingMode) -> None:
        self._buffer.clear()
        self._buffering = True
        self._buffering_mode = mode

    def _repeat_last(self) -> Action:
        if self._buffering_mode is None or not self._buffer:
            return NOOP
        action, _ = resolve_buffered(self._buffering_mode, self._buffer)
        return action

    @property
    def description(self) -> str:
        if self._buffering:
            return "Normal Mode (buffering)"
        return "Normal Mode"
