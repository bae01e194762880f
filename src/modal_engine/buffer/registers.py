"""Single-slot register holding the last yanked text."""

from __future__ import annotations

from typing import Optional


class Register:
    """Keeps whatever was yanked last; put is a no-op until something is."""

    def __init__(self) -> None:
        self._content: Optional[str] = None

    def yank(self, text: str) -> None:
        self._content = text

    def peek(self) -> Optional[str]:
        return self._content

    @property
    def is_empty(self) -> bool:
        return self._content is None
