"""Editing modes and the manager that switches between them."""

from .base_mode import Mode
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .mode_manager import MODE_TYPES, EditorMode, ModeManager
from .normal_mode import BufferingMode, NormalMode

__all__ = [
    "Mode",
    "EditorMode",
    "ModeManager",
    "MODE_TYPES",
    "NormalMode",
    "InsertMode",
    "CommandMode",
    "BufferingMode",
]
