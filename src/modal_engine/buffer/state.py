"""Cursor and selection value types shared by the document and the engine."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Tuple


@total_ordering
@dataclass(frozen=True, slots=True)
class Cursor:
    """Position inside the document, not on the screen.

    ``y`` indexes a line and ``x`` a character offset within it. Cursors order
    by line first, then by column.
    """

    x: int = 0
    y: int = 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return (self.y, self.x) < (other.y, other.x)

    def moved(self, *, dx: int = 0, dy: int = 0) -> "Cursor":
        return Cursor(self.x + dx, self.y + dy)

    def with_x(self, x: int) -> "Cursor":
        return Cursor(x, self.y)

    def as_tuple(self) -> Tuple[int, int]:
        """Return ``(row, column)``, the order hosts usually expect."""

        return (self.y, self.x)


@dataclass(slots=True)
class Selection:
    """Pair of cursors; which one is the start is decided at read time."""

    anchor: Cursor
    head: Cursor

    @property
    def start(self) -> Cursor:
        return self.anchor if self.anchor < self.head else self.head

    @property
    def end(self) -> Cursor:
        return self.head if self.anchor < self.head else self.anchor

    def contains_line(self, line_number: int) -> bool:
        return self.start.y <= line_number <= self.end.y

    def set_end(self, pos: Cursor) -> None:
        # Only the moving endpoint is replaced; start/end sort themselves out.
        self.head = pos

    def as_tuple(self) -> Tuple[Cursor, Cursor]:
        return (self.start, self.end)
