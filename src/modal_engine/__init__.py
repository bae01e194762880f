"""UI-agnostic modal (vim-style) editing engine."""

from modal_engine.config import EngineConfig
from modal_engine.engine import EditorEngine

__all__ = [
    "EditorEngine",
    "EngineConfig",
    "actions",
    "adapters",
    "buffer",
    "engine",
    "events",
    "keys",
    "modes",
    "motion",
    "runtime",
]

__version__ = "0.1.0"
