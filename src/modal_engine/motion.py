"""Motion resolution: where a word or character-find motion lands.

Motions never touch the engine. ``resolve`` takes the document lines and the
cursor and returns ``(origin, target)``; moving the cursor to ``target`` is the
engine's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

from modal_engine.buffer.state import Cursor

WORD_SEPARATOR = " "


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class CharacterFind:
    """Next occurrence of ``target`` on the current line (``f`` / ``F``)."""

    direction: Direction
    target: str


@dataclass(frozen=True, slots=True)
class WordMotion:
    """Move ``abs(count)`` words; the sign gives the direction."""

    count: int


Motion = Union[CharacterFind, WordMotion]
MotionSpan = Tuple[Cursor, Cursor]


def resolve(motion: Motion, lines: Sequence[str], cursor: Cursor) -> MotionSpan:
    match motion:
        case CharacterFind(direction=direction, target=target):
            return cursor, _find_on_line(lines[cursor.y], cursor, direction, target)
        case WordMotion(count=count):
            return cursor, _move_by_words(lines, cursor, count)
    raise TypeError(f"Unsupported motion {motion!r}")


def _find_on_line(line: str, cursor: Cursor, direction: Direction, target: str) -> Cursor:
    if direction is Direction.FORWARD:
        columns = range(cursor.x + 1, len(line))
    else:
        columns = range(min(cursor.x, len(line)) - 1, -1, -1)
    for column in columns:
        if line[column] == target:
            return cursor.with_x(column)
    return cursor


def _move_by_words(lines: Sequence[str], cursor: Cursor, count: int) -> Cursor:
    if count == 0:
        return cursor
    if count > 0:
        return _words_forward(lines, cursor, count)
    return _words_backward(lines, cursor, -count)


def _words_forward(lines: Sequence[str], cursor: Cursor, remaining: int) -> Cursor:
    x, y = cursor.x, cursor.y
    last_line = len(lines) - 1
    while remaining > 0:
        line = lines[y]
        if not line:
            # An empty line counts as one word.
            if y < last_line:
                x, y = 0, y + 1
            remaining -= 1
        elif x < len(line) - 1:
            x += 1
            if line[x] == WORD_SEPARATOR:
                remaining -= 1
                x += 1
        else:
            if y < last_line:
                x, y = 0, y + 1
            remaining -= 1
    return Cursor(x, y)


def _words_backward(lines: Sequence[str], cursor: Cursor, remaining: int) -> Cursor:
    x, y = cursor.x, cursor.y
    if x > 0 and lines[y][x - 1] == WORD_SEPARATOR:
        # Starting right after a separator: step over it as well.
        remaining += 1

    while remaining > 0:
        line = lines[y]
        if x > 0:
            x -= 1
            if line[x] == WORD_SEPARATOR or x == 0:
                remaining -= 1
        elif y > 0:
            y -= 1
            x = max(len(lines[y]) - 1, 0)
        else:
            remaining -= 1

    if x != 0:
        # Land on the first character of the word, after the separator.
        x += 1
    return Cursor(x, y)


__all__ = [
    "CharacterFind",
    "Direction",
    "Motion",
    "MotionSpan",
    "WordMotion",
    "WORD_SEPARATOR",
    "resolve",
]
