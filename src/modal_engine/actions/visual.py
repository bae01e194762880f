"""Selection helpers used by yank."""

from __future__ import annotations

from typing import Sequence

from modal_engine.buffer.state import Selection


def selection_text(lines: Sequence[str], selection: Selection) -> str:
    """Text covered by ``selection``, both end columns included.

    The first line contributes from the start column to its end, inner lines
    are taken whole and the last line contributes up to the end column. Lines
    are concatenated without separators. Rows that no longer exist (the
    selection outlived a line deletion) are skipped.
    """

    start, end = selection.start, selection.end
    last_row = min(end.y, len(lines) - 1)
    parts: list[str] = []
    for row in range(start.y, last_row + 1):
        line = lines[row]
        if row == start.y and row == end.y:
            parts.append(line[start.x : end.x + 1])
        elif row == start.y:
            parts.append(line[start.x :])
        elif row == end.y:
            parts.append(line[: end.x + 1])
        else:
            parts.append(line)
    return "".join(parts)


__all__ = ["selection_text"]
