"""Bounds helpers shared across buffer services."""

from __future__ import annotations

from .document import Document
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(document: Document, cursor: Cursor) -> Cursor:
    if cursor.y < 0 or cursor.y >= document.line_count:
        raise BufferValidationError("Row out of range", cursor=cursor)
    if cursor.x < 0 or cursor.x > document.line_length(cursor.y):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def clamp_cursor(document: Document, cursor: Cursor) -> Cursor:
    row = max(0, min(cursor.y, document.line_count - 1))
    col = max(0, min(cursor.x, document.line_length(row)))
    return Cursor(col, row)


def fit_column_to_line(document: Document, cursor: Cursor) -> Cursor:
    """Clamp for vertical moves: land on the last character, not past it."""

    length = document.line_length(cursor.y)
    if length == 0:
        return cursor.with_x(0)
    if cursor.x > length - 1:
        return cursor.with_x(length - 1)
    return cursor
