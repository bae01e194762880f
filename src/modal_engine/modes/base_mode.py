"""Base class shared by the three editing modes."""

from __future__ import annotations

from modal_engine.actions import Action, ModeName
from modal_engine.keys import Key


class Mode:
    """Translates one key at a time into an :class:`Action`.

    Modes keep only their own input state (pending keys, typed command text);
    they never see or touch the document.
    """

    name: ModeName = "normal"

    def handle_key(self, key: Key) -> Action:  # pragma: no cover - abstract override
        raise NotImplementedError

    @property
    def description(self) -> str:  # pragma: no cover - overridden by every mode
        return self.name
