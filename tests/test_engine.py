from __future__ import annotations

import random
from typing import List

import pytest

from modal_engine import EditorEngine, EngineConfig
from modal_engine.actions import CompositeAction, MoveCursor, SwitchMode
from modal_engine.buffer import BufferValidationError, Cursor
from modal_engine.events import MODE_CHANGED, TEXT_YANKED
from modal_engine.keys import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    Key,
)

SIMPLE_TEXT = "Hello world\nanother sentence\n"
LONG_TEXT = "Hello world\nanother sentence\n\nAnd a last sentence\n"


def make_engine(text: str, **kwargs: object) -> EditorEngine:
    return EditorEngine.from_text(text, **kwargs)


def tap(engine: EditorEngine, *keys: int | str | Key) -> None:
    for key in keys:
        engine.apply_key(ord(key) if isinstance(key, str) else key)


def assert_cursor_at(engine: EditorEngine, x: int, y: int) -> None:
    assert engine.cursor == Cursor(x, y)


def test_empty_construction_yields_one_empty_line() -> None:
    engine = EditorEngine()

    assert engine.lines == ("",)
    assert engine.cursor == Cursor(0, 0)
    assert engine.mode_name == "normal"


def test_construction_rejects_cursor_outside_document() -> None:
    with pytest.raises(BufferValidationError):
        EditorEngine(["abc"], cursor=Cursor(0, 3))


def test_switching_to_unknown_mode_raises() -> None:
    engine = EditorEngine()

    with pytest.raises(KeyError):
        engine.switch_mode("visual")  # type: ignore[arg-type]


def test_undo_removes_typed_characters_one_at_a_time() -> None:
    engine = make_engine("\n")
    engine.switch_mode("insert")
    tap(engine, *"abc")
    assert engine.lines[0] == "abc"

    engine.switch_mode("normal")
    tap(engine, "u")
    assert engine.lines[0] == "ab"
    tap(engine, "u")
    assert engine.lines[0] == "a"


def test_undo_with_empty_history_is_noop() -> None:
    engine = make_engine("abc")

    tap(engine, "u")

    assert engine.lines == ("abc",)
    assert_cursor_at(engine, 0, 0)


def test_undo_of_composite_consumes_entry_without_editing() -> None:
    engine = make_engine("abc")
    tap(engine, "x")
    assert engine.lines == ("bc",)
    assert len(engine.history) == 1

    tap(engine, "u")

    assert engine.lines == ("bc",)
    assert len(engine.history) == 0


def test_visual_yank_then_put() -> None:
    engine = make_engine(LONG_TEXT)
    yanked: List[object] = []
    engine.bus.subscribe(TEXT_YANKED, yanked.append)

    tap(engine, "j", "v", "l", "l", "l", "l", "y", "j", "p")

    assert engine.lines[2] == "anoth"
    assert engine.register.peek() == "anoth"
    assert yanked == ["anoth"]
    assert engine.selection is None
    assert_cursor_at(engine, 0, 2)


def test_visual_yank_across_lines_then_put() -> None:
    engine = make_engine(LONG_TEXT, cursor=Cursor(6, 0))

    tap(engine, "v", "j", "j", "y")
    assert engine.register.peek() == "worldanother sentence"
    assert engine.selection is None

    tap(engine, "j", "p")

    assert engine.lines[3] == "worldanother sentenceAnd a last sentence"
    assert engine.lines[:3] == ("Hello world", "another sentence", "")
    assert_cursor_at(engine, 0, 3)


def test_selection_follows_cursor_and_toggles_off() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "v", "l", "l", "j")
    assert engine.selection is not None
    assert engine.selection.as_tuple() == (Cursor(0, 0), Cursor(2, 1))
    assert engine.status.endswith("selecting")

    tap(engine, "v")
    assert engine.selection is None


def test_escape_in_normal_mode_drops_selection() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "v", "l", KEY_ESCAPE)

    assert engine.selection is None
    assert_cursor_at(engine, 1, 0)


def test_yank_without_selection_and_put_without_register_are_noops() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "y", "p")

    assert engine.register.is_empty
    assert engine.lines == ("Hello world", "another sentence")


def test_insertion_at_end_of_line() -> None:
    engine = make_engine(SIMPLE_TEXT)
    engine.switch_mode("insert")

    for _ in range(20):
        tap(engine, KEY_RIGHT)
    tap(engine, "f")

    assert engine.lines[0] == "Hello worldf"


def test_forward_find() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "f", "o")
    assert_cursor_at(engine, 4, 0)

    tap(engine, "f", "Z")
    assert_cursor_at(engine, 4, 0)


def test_backward_find_and_repeat() -> None:
    engine = make_engine("Hello world foo", cursor=Cursor(14, 0))

    tap(engine, "F", "o")
    assert_cursor_at(engine, 13, 0)
    tap(engine, ";")
    assert_cursor_at(engine, 7, 0)
    tap(engine, "F", "H")
    assert_cursor_at(engine, 0, 0)


def test_forward_find_repeat() -> None:
    engine = make_engine("Hello world foo")

    tap(engine, "f", "o", ";", ";")

    assert_cursor_at(engine, 13, 0)


def test_replace_character_under_cursor() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "r", "a")
    assert engine.lines[0] == "aello world"
    assert_cursor_at(engine, 0, 0)

    tap(engine, "r", "H")
    assert engine.lines[0] == "Hello world"


def test_x_deletes_character_under_cursor() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "l", "x")

    assert engine.lines[0] == "Hllo world"
    assert_cursor_at(engine, 1, 0)


def test_vertical_moves_clamp_column() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, KEY_DOWN, KEY_DOWN)
    for _ in range(20):
        tap(engine, KEY_RIGHT)
    assert_cursor_at(engine, 16, 1)

    tap(engine, KEY_UP)
    assert_cursor_at(engine, 10, 0)


def test_vertical_move_onto_empty_line_goes_to_column_zero() -> None:
    engine = make_engine(LONG_TEXT, cursor=Cursor(5, 1))

    tap(engine, "j")

    assert_cursor_at(engine, 0, 2)


def test_horizontal_moves_stop_at_line_bounds() -> None:
    engine = make_engine("Hello world")

    for step in range(10):
        tap(engine, KEY_RIGHT)
        assert_cursor_at(engine, step + 1, 0)
    for _ in range(5):
        tap(engine, KEY_RIGHT)
    assert_cursor_at(engine, 11, 0)

    for _ in range(15):
        tap(engine, KEY_LEFT)
    assert_cursor_at(engine, 0, 0)


def test_insert_mode_editing_session() -> None:
    engine = make_engine(SIMPLE_TEXT)
    assert len(engine.lines) == 2
    engine.switch_mode("insert")

    tap(engine, "a", "a", "a", KEY_ENTER)
    assert len(engine.lines) == 3
    assert engine.lines[0] == "aaa"

    tap(engine, *[KEY_RIGHT] * 5, KEY_ENTER)
    assert len(engine.lines) == 4
    assert engine.lines[1] == "Hello"
    assert engine.lines[2] == " world"

    tap(engine, KEY_ENTER, KEY_ENTER, KEY_ENTER)
    assert len(engine.lines) == 7
    assert engine.lines[5] == " world"
    assert engine.lines[6] == "another sentence"

    tap(engine, KEY_DOWN, *[KEY_RIGHT] * 5, KEY_BACKSPACE, KEY_BACKSPACE)
    assert engine.lines[6] == "anoer sentence"


def test_backspace_at_line_start_joins_lines() -> None:
    engine = make_engine(SIMPLE_TEXT, cursor=Cursor(0, 1))
    engine.switch_mode("insert")

    tap(engine, KEY_BACKSPACE)

    assert engine.lines == ("Hello worldanother sentence",)
    assert_cursor_at(engine, 11, 0)


def test_backspace_at_document_start_is_noop() -> None:
    engine = make_engine(SIMPLE_TEXT)
    engine.switch_mode("insert")

    tap(engine, KEY_BACKSPACE)

    assert engine.lines == ("Hello world", "another sentence")


def test_word_motions() -> None:
    engine = make_engine("Hello world")

    tap(engine, KEY_ESCAPE, "w")
    assert_cursor_at(engine, 6, 0)
    tap(engine, "w")
    assert_cursor_at(engine, 10, 0)
    tap(engine, *"wwwww")
    assert_cursor_at(engine, 10, 0)

    tap(engine, "b")
    assert_cursor_at(engine, 6, 0)
    tap(engine, "b")
    assert_cursor_at(engine, 0, 0)


def test_enter_in_normal_mode_moves_to_next_line_start() -> None:
    engine = make_engine(SIMPLE_TEXT, cursor=Cursor(4, 0))

    tap(engine, KEY_ENTER)
    assert_cursor_at(engine, 0, 1)
    tap(engine, KEY_ENTER)
    assert_cursor_at(engine, 0, 1)


def test_open_line_below() -> None:
    engine = make_engine(SIMPLE_TEXT)

    tap(engine, "o", "x")

    assert engine.lines == ("Hello world", "x", "another sentence")
    assert engine.mode_name == "insert"


def test_open_line_below_last_line() -> None:
    engine = make_engine(SIMPLE_TEXT, cursor=Cursor(0, 1))

    tap(engine, "o", "x")

    assert engine.lines == ("Hello world", "another sentence", "x")


def test_open_line_above() -> None:
    engine = make_engine(SIMPLE_TEXT, cursor=Cursor(3, 1))

    tap(engine, "O", "x")

    assert engine.lines == ("Hello world", "x", "another sentence")
    assert_cursor_at(engine, 1, 1)
    assert engine.mode_name == "insert"


def test_line_jump() -> None:
    engine = make_engine("a\nb\nc\nd", cursor=Cursor(1, 0))

    tap(engine, "3", "G")
    assert_cursor_at(engine, 0, 2)

    tap(engine, "0", "G")
    assert_cursor_at(engine, 0, 0)

    tap(engine, "4", "G")
    assert_cursor_at(engine, 0, 3)

    tap(engine, "9", "G")
    assert_cursor_at(engine, 0, 3)


def test_digits_followed_by_other_key_are_discarded() -> None:
    engine = make_engine("abc")

    tap(engine, "2", "x")

    assert engine.lines == ("abc",)
    assert engine.mode_name == "normal"


def test_undecodable_codes_are_ignored() -> None:
    engine = make_engine("abc")
    before = engine.view()

    tap(engine, 1, -3)

    assert engine.view() == before


def test_status_line_tracks_mode() -> None:
    engine = make_engine("abc")
    sep = "  |  "

    assert engine.status == sep.join(["   Press F1 to quit", "Normal Mode", ""])
    tap(engine, "f")
    assert "Normal Mode (buffering)" in engine.status
    tap(engine, KEY_ESCAPE, "i")
    assert engine.status == sep.join(["   Press F1 to quit", "Insert Mode", ""])
    tap(engine, KEY_ESCAPE, ":", "w")
    assert engine.status == sep.join(["   Press F1 to quit", "Command: w", ""])


def test_status_line_uses_config() -> None:
    config = EngineConfig(help_text="help", status_separator=" / ")
    engine = EditorEngine(["abc"], config=config)

    tap(engine, "v")

    assert engine.status == "help / Normal Mode / selecting"


def test_mode_changes_are_published() -> None:
    engine = make_engine("abc")
    seen: List[object] = []
    engine.bus.subscribe(MODE_CHANGED, seen.append)

    tap(engine, "i", KEY_ESCAPE, ":")

    assert seen == ["insert", "normal", "command"]


def test_apply_action_is_available_to_hosts() -> None:
    engine = make_engine("abc")

    engine.apply_action(CompositeAction.of(MoveCursor(dx=1), SwitchMode("insert")))

    assert_cursor_at(engine, 1, 0)
    assert engine.mode_name == "insert"


def test_view_snapshot() -> None:
    engine = make_engine(SIMPLE_TEXT, name="notes.txt")
    tap(engine, "v", "l")

    mirror = engine.view()

    assert mirror.text == "Hello world\nanother sentence"
    assert mirror.cursor == Cursor(1, 0)
    assert mirror.selection == (Cursor(0, 0), Cursor(1, 0))
    assert mirror.mode == "normal"
    assert mirror.attributes["buffer"] == "notes.txt"
    assert mirror.attributes["dirty"] == "false"


def test_cursor_stays_in_bounds_for_random_input() -> None:
    rng = random.Random(1234)
    pool: List[int | str] = [
        KEY_UP,
        KEY_DOWN,
        KEY_LEFT,
        KEY_RIGHT,
        KEY_ENTER,
        KEY_BACKSPACE,
        KEY_ESCAPE,
        *"hjklwbiovyupxrfF;3G: a",
    ]
    engine = make_engine(LONG_TEXT)

    for _ in range(2000):
        tap(engine, rng.choice(pool))
        lines = engine.lines
        cursor = engine.cursor
        assert lines
        assert 0 <= cursor.y < len(lines)
        assert 0 <= cursor.x <= len(lines[cursor.y])
