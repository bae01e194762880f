"""Document, cursor, selection and register data structures.

The undo history lives in :mod:`modal_engine.buffer.undo`; it depends on the
action union and is imported from there directly.
"""

from .document import Document
from .registers import Register
from .state import Cursor, Selection
from .sync import BufferMirror, BufferValidationError, EditorHost, SaveRequest
from .validation import clamp_cursor, ensure_cursor, fit_column_to_line

__all__ = [
    "Document",
    "Cursor",
    "Selection",
    "Register",
    "BufferMirror",
    "BufferValidationError",
    "EditorHost",
    "SaveRequest",
    "clamp_cursor",
    "ensure_cursor",
    "fit_column_to_line",
]
