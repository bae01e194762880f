"""Core document data structure for modal_engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class Document:
    """Mutable list-of-lines text storage owned by a single engine.

    The document never holds zero lines; an empty input becomes one empty
    line. Every mutation bumps ``version`` and marks the document dirty.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Document":
        return cls(_lines=[str(line) for line in lines])

    @classmethod
    def from_text(cls, text: str) -> "Document":
        # A trailing newline does not produce an extra empty line.
        return cls(_lines=text.splitlines())

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def insert_text(self, row: int, col: int, text: str) -> None:
        line = self._lines[row]
        self._lines[row] = line[:col] + text + line[col:]
        self._touch()

    def delete_char(self, row: int, col: int) -> str:
        line = self._lines[row]
        removed = line[col]
        self._lines[row] = line[:col] + line[col + 1 :]
        self._touch()
        return removed

    def split_line(self, row: int, col: int) -> None:
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])
        self._touch()

    def join_with_previous(self, row: int) -> int:
        """Append line ``row`` to the line above; return the seam column."""

        line = self._lines.pop(row)
        seam = len(self._lines[row - 1])
        self._lines[row - 1] += line
        self._touch()
        return seam

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
