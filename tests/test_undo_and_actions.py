from __future__ import annotations

from modal_engine.actions import (
    AddCharAtCursor,
    CompositeAction,
    DeleteCharAtCursor,
    Exit,
    MoveCursor,
    NoOp,
    Save,
    SwitchMode,
    inverse_of,
    is_undoable,
    selection_text,
    submit_command_line,
)
from modal_engine.buffer import Cursor, Selection
from modal_engine.buffer.undo import UndoHistory


def test_only_edits_and_composites_are_undoable() -> None:
    assert is_undoable(AddCharAtCursor("a"))
    assert is_undoable(DeleteCharAtCursor())
    assert is_undoable(CompositeAction.of(MoveCursor(dx=1), DeleteCharAtCursor()))
    assert not is_undoable(MoveCursor(dx=1))
    assert not is_undoable(SwitchMode("insert"))
    assert not is_undoable(NoOp())


def test_inverse_is_defined_for_insertion_only() -> None:
    assert inverse_of(AddCharAtCursor("a")) == DeleteCharAtCursor()
    assert inverse_of(DeleteCharAtCursor()) is None
    assert inverse_of(CompositeAction.of(AddCharAtCursor("a"))) is None


def test_history_records_cursor_one_cell_right() -> None:
    history = UndoHistory()

    assert history.record(AddCharAtCursor("a"), Cursor(0, 0)) is True
    assert history.record(MoveCursor(dx=1), Cursor(1, 0)) is False
    assert len(history) == 1

    inverse, cursor = history.undo()  # type: ignore[misc]
    assert inverse == DeleteCharAtCursor()
    assert cursor == Cursor(1, 0)
    assert history.undo() is None
    assert not history.can_undo()


def test_history_pops_newest_first() -> None:
    history = UndoHistory()
    history.record(AddCharAtCursor("a"), Cursor(0, 0))
    history.record(DeleteCharAtCursor(), Cursor(4, 2))

    assert [entry.cursor for entry in history.entries()] == [Cursor(1, 0), Cursor(5, 2)]
    inverse, cursor = history.undo()  # type: ignore[misc]
    assert inverse is None
    assert cursor == Cursor(5, 2)
    assert len(history) == 1


def test_selection_text_single_line_includes_end_column() -> None:
    lines = ("Hello world",)
    selection = Selection(Cursor(4, 0), Cursor(0, 0))

    assert selection_text(lines, selection) == "Hello"


def test_selection_text_spans_lines_without_separators() -> None:
    lines = ("Hello world", "another", "sentence")
    selection = Selection(Cursor(6, 0), Cursor(2, 2))

    assert selection_text(lines, selection) == "worldanothersen"


def test_selection_text_skips_rows_that_no_longer_exist() -> None:
    lines = ("abc", "def")
    selection = Selection(Cursor(1, 0), Cursor(0, 4))

    assert selection_text(lines, selection) == "bcdef"


def test_command_line_table() -> None:
    assert submit_command_line("w") == CompositeAction.of(Save(), SwitchMode("normal"))
    assert submit_command_line("q") == Exit()
    assert submit_command_line("wq") == CompositeAction.of(Save(), Exit())
    assert submit_command_line("x") == CompositeAction.of(Save(), Exit())


def test_unknown_command_returns_to_normal_mode() -> None:
    assert submit_command_line("frobnicate") == SwitchMode("normal")
    assert submit_command_line("") == SwitchMode("normal")
