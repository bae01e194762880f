"""Textual host adapter; the demo app lives in ``.app`` and needs textual."""

from .controller import (
    NAMED_KEYS,
    TextualEditorAdapter,
    TextualUIHooks,
    textual_key_to_key,
)

__all__ = [
    "NAMED_KEYS",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "textual_key_to_key",
]
