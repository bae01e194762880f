"""Engine configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "MODAL_ENGINE_"
DEFAULT_HELP_TEXT = "   Press F1 to quit"
DEFAULT_STATUS_SEPARATOR = "  |  "


@dataclass(frozen=True)
class EngineConfig:
    """Presentation knobs the engine needs to build its status line."""

    help_text: str = DEFAULT_HELP_TEXT
    status_separator: str = DEFAULT_STATUS_SEPARATOR
    # Function key the host treats as "quit now"; the engine itself ignores it.
    quit_function_key: int = 1

    def __post_init__(self) -> None:
        if self.quit_function_key < 0:
            raise ValueError("quit_function_key must not be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        raw_quit = env.get(f"{ENV_PREFIX}QUIT_KEY")
        try:
            quit_key = int(raw_quit) if raw_quit else defaults.quit_function_key
        except ValueError as exc:
            raise ValueError(f"{ENV_PREFIX}QUIT_KEY must be an integer") from exc
        return cls(
            help_text=env.get(f"{ENV_PREFIX}HELP_TEXT", defaults.help_text),
            status_separator=env.get(
                f"{ENV_PREFIX}STATUS_SEPARATOR", defaults.status_separator
            ),
            quit_function_key=quit_key,
        )


__all__ = ["EngineConfig", "ENV_PREFIX", "DEFAULT_HELP_TEXT"]
