"""Boundary types exchanged between the engine and its host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from .state import Cursor, Selection


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Read-only snapshot a host renders after each key."""

    lines: Tuple[str, ...]
    cursor: Cursor
    selection: Optional[Tuple[Cursor, Cursor]]
    status: str
    mode: str
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class SaveRequest:
    """Payload of the ``engine.save`` intent."""

    name: str
    lines: Tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class EditorHost(Protocol):
    """What a host must provide to honour save and exit requests."""

    def save(self, request: SaveRequest) -> None:
        """Persist the lines; may raise ``OSError``."""
        ...

    def exit(self) -> None:
        """Terminate once any pending save has been honoured."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a host hands the engine an out-of-bounds cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def selection_pair(selection: Optional[Selection]) -> Optional[Tuple[Cursor, Cursor]]:
    if selection is None:
        return None
    return selection.as_tuple()
