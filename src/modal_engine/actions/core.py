"""Semantic actions produced by modes and applied by the engine.

Modes never edit the document themselves: every key turns into one of the
actions below, and the engine is the only place that interprets them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple, Union

from modal_engine.motion import Motion

ModeName = Literal["normal", "insert", "command"]


@dataclass(frozen=True, slots=True)
class AddCharAtCursor:
    """Insert ``ch`` at the cursor and step right."""

    ch: str


@dataclass(frozen=True, slots=True)
class DeleteCharAtCursor:
    """Delete the character before the cursor, joining lines at column 0."""


@dataclass(frozen=True, slots=True)
class SplitLine:
    """Break the current line at the cursor (Enter)."""


@dataclass(frozen=True, slots=True)
class MoveCursor:
    """Single-step move; ``dy`` grows downwards."""

    dx: int = 0
    dy: int = 0


@dataclass(frozen=True, slots=True)
class MoveCursorDown:
    """Go to column 0 of the next line."""


@dataclass(frozen=True, slots=True)
class MoveToLineStart:
    pass


@dataclass(frozen=True, slots=True)
class MoveToLineEnd:
    pass


@dataclass(frozen=True, slots=True)
class ApplyMotion:
    motion: Motion


@dataclass(frozen=True, slots=True)
class SwitchMode:
    target: ModeName


@dataclass(frozen=True, slots=True)
class ToggleSelection:
    pass


@dataclass(frozen=True, slots=True)
class Yank:
    pass


@dataclass(frozen=True, slots=True)
class Put:
    pass


@dataclass(frozen=True, slots=True)
class AbortCurrentAction:
    """Escape in normal mode: drop the selection, if any."""


@dataclass(frozen=True, slots=True)
class Save:
    pass


@dataclass(frozen=True, slots=True)
class Exit:
    pass


@dataclass(frozen=True, slots=True)
class CompositeAction:
    """Sub-actions applied in order, recorded and undone as one unit."""

    actions: Tuple["Action", ...]

    @classmethod
    def of(cls, *actions: "Action") -> "CompositeAction":
        return cls(actions=tuple(actions))


@dataclass(frozen=True, slots=True)
class JumpToLine:
    """Line number as typed before ``G``.

    Counted from 1, so ``3G`` targets row index 2, one row above a 0-based
    reading of the same digits. ``0`` behaves like ``1``; numbers past the
    last line are ignored.
    """

    line: int


@dataclass(frozen=True, slots=True)
class Undo:
    pass


@dataclass(frozen=True, slots=True)
class NoOp:
    pass


Action = Union[
    AddCharAtCursor,
    DeleteCharAtCursor,
    SplitLine,
    MoveCursor,
    MoveCursorDown,
    MoveToLineStart,
    MoveToLineEnd,
    ApplyMotion,
    SwitchMode,
    ToggleSelection,
    Yank,
    Put,
    AbortCurrentAction,
    Save,
    Exit,
    CompositeAction,
    JumpToLine,
    Undo,
    NoOp,
]

NOOP = NoOp()


def is_undoable(action: Action) -> bool:
    """Whether the undo history keeps a record of ``action``."""

    match action:
        case AddCharAtCursor() | DeleteCharAtCursor() | SplitLine():
            return True
        case CompositeAction():
            return True
        case (
            MoveCursor()
            | MoveCursorDown()
            | MoveToLineStart()
            | MoveToLineEnd()
            | ApplyMotion()
            | SwitchMode()
            | ToggleSelection()
            | Yank()
            | Put()
            | AbortCurrentAction()
            | Save()
            | Exit()
            | JumpToLine()
            | Undo()
            | NoOp()
        ):
            return False
    raise TypeError(f"Unknown action {action!r}")


def inverse_of(action: Action) -> Optional[Action]:
    """Return the action that reverts ``action``, or ``None`` if none is defined.

    Only character insertion has an inverse today. Deletions, line splits and
    composites are still recorded but replay as nothing.
    """

    match action:
        case AddCharAtCursor():
            return DeleteCharAtCursor()
        case DeleteCharAtCursor() | SplitLine() | CompositeAction():
            return None
        case (
            MoveCursor()
            | MoveCursorDown()
            | MoveToLineStart()
            | MoveToLineEnd()
            | ApplyMotion()
            | SwitchMode()
            | ToggleSelection()
            | Yank()
            | Put()
            | AbortCurrentAction()
            | Save()
            | Exit()
            | JumpToLine()
            | Undo()
            | NoOp()
        ):
            return None
    raise TypeError(f"Unknown action {action!r}")


__all__ = [
    "Action",
    "AbortCurrentAction",
    "AddCharAtCursor",
    "ApplyMotion",
    "CompositeAction",
    "DeleteCharAtCursor",
    "Exit",
    "JumpToLine",
    "ModeName",
    "MoveCursor",
    "MoveCursorDown",
    "MoveToLineEnd",
    "MoveToLineStart",
    "NOOP",
    "NoOp",
    "Put",
    "Save",
    "SplitLine",
    "SwitchMode",
    "ToggleSelection",
    "Undo",
    "Yank",
    "inverse_of",
    "is_undoable",
]
