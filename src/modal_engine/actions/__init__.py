"""Semantic actions exchanged between modes and the engine."""

from .core import (
    NOOP,
    AbortCurrentAction,
    Action,
    AddCharAtCursor,
    ApplyMotion,
    CompositeAction,
    DeleteCharAtCursor,
    Exit,
    JumpToLine,
    ModeName,
    MoveCursor,
    MoveCursorDown,
    MoveToLineEnd,
    MoveToLineStart,
    NoOp,
    Put,
    Save,
    SplitLine,
    SwitchMode,
    ToggleSelection,
    Undo,
    Yank,
    inverse_of,
    is_undoable,
)
from .command import submit_command_line
from .visual import selection_text

__all__ = [
    "NOOP",
    "AbortCurrentAction",
    "Action",
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
    "selection_text",
    "submit_command_line",
]
