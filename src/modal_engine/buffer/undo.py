"""Flat undo history of recorded actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from modal_engine.actions.core import Action, inverse_of, is_undoable

from .state import Cursor


@dataclass(frozen=True, slots=True)
class UndoEntry:
    action: Action
    cursor: Cursor


class UndoHistory:
    """Append-only log walked strictly backwards; there is no redo."""

    def __init__(self) -> None:
        self._entries: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, action: Action, cursor: Cursor) -> bool:
        if not is_undoable(action):
            return False
        # Stored one cell to the right: that is where the inverse deletion of
        # an insertion has to run.
        self._entries.append(UndoEntry(action=action, cursor=cursor.moved(dx=1)))
        return True

    def can_undo(self) -> bool:
        return bool(self._entries)

    def undo(self) -> Optional[Tuple[Optional[Action], Cursor]]:
        """Pop the newest entry; return its inverse and the recorded cursor."""

        if not self._entries:
            return None
        entry = self._entries.pop()
        return inverse_of(entry.action), entry.cursor

    def entries(self) -> Tuple[UndoEntry, ...]:
        return tuple(self._entries)
