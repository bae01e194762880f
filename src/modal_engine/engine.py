"""The editing engine: document state plus the key -> action -> mutation loop."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from modal_engine.actions import (
    AbortCurrentAction,
    Action,
    AddCharAtCursor,
    ApplyMotion,
    CompositeAction,
    DeleteCharAtCursor,
    Exit,
    JumpToLine,
    ModeName,
    MoveCursor,
    MoveCursorDown,
    MoveToLineEnd,
    MoveToLineStart,
    NoOp,
    Put,
    Save,
    SplitLine,
    SwitchMode,
    ToggleSelection,
    Undo,
    Yank,
    selection_text,
)
from modal_engine.buffer import (
    BufferMirror,
    Cursor,
    Document,
    Register,
    SaveRequest,
    Selection,
    clamp_cursor,
    ensure_cursor,
    fit_column_to_line,
)
from modal_engine.buffer.sync import selection_pair
from modal_engine.buffer.undo import UndoHistory
from modal_engine.config import EngineConfig
from modal_engine.events import (
    EXIT_REQUESTED,
    MODE_CHANGED,
    SAVE_REQUESTED,
    TEXT_YANKED,
    EventBus,
)
from modal_engine.keys import Key, KeyDecoder
from modal_engine.modes import ModeManager
from modal_engine.motion import resolve
from modal_engine.runtime import telemetry


class EditorEngine:
    """Owns the lines, cursor, selection, mode, register and undo history.

    Hosts feed keys through :meth:`apply_key` and read state back through the
    accessors or :meth:`view`. Saving and exiting are published on
    :attr:`bus` as ``engine.save`` / ``engine.exit``; the engine never touches
    files or the process itself.
    """

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        name: str = "untitled",
        cursor: Optional[Cursor] = None,
        config: Optional[EngineConfig] = None,
        decoder: Optional[KeyDecoder] = None,
        initial_mode: ModeName = "normal",
    ) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.document = Document.from_lines(lines)
        self.register = Register()
        self.history = UndoHistory()
        self.modes = ModeManager(initial_mode)
        self.bus = EventBus()
        self.decoder = decoder or KeyDecoder()
        self.exit_requested = False
        self._selection: Optional[Selection] = None
        self._cursor = (
            ensure_cursor(self.document, cursor) if cursor is not None else Cursor()
        )

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "EditorEngine":
        return cls(text.splitlines(), **kwargs)  # type: ignore[arg-type]

    # Read-only accessors

    @property
    def lines(self) -> Tuple[str, ...]:
        return tuple(self.document.snapshot())

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def mode_name(self) -> str:
        return self.modes.active_mode.name

    @property
    def status(self) -> str:
        return self.config.status_separator.join(
            [
                self.config.help_text,
                self.modes.description,
                "selecting" if self._selection is not None else "",
            ]
        )

    def view(self) -> BufferMirror:
        return BufferMirror(
            lines=self.lines,
            cursor=self._cursor,
            selection=selection_pair(self._selection),
            status=self.status,
            mode=self.mode_name,
            attributes={
                "buffer": self.name,
                "version": str(self.document.version),
                "dirty": str(self.document.dirty).lower(),
            },
        )

    # Input

    def apply_key(self, code: int | Key) -> None:
        """Translate one key through the active mode and apply the result."""

        key = code if isinstance(code, Key) else self.decoder.decode(code)
        if key is None:
            return
        with telemetry.span(
            "engine::apply_key",
            component="engine",
            logger_name="modal_engine.engine",
            metadata={"buffer": self.name, "mode": self.mode_name},
        ) as handle:
            action = self.modes.handle_key(key)
            handle.add_metadata("action", type(action).__name__)
            self.apply_action(action)

    def apply_action(self, action: Action, *, is_undo: bool = False) -> None:
        if not is_undo:
            self.history.record(action, self._cursor)
        self._dispatch(action, is_undo)

    def switch_mode(self, name: ModeName) -> None:
        self.apply_action(SwitchMode(name))

    def _dispatch(self, action: Action, is_undo: bool) -> None:
        match action:
            case AddCharAtCursor(ch=ch):
                self._add_char(ch)
            case DeleteCharAtCursor():
                self._delete_char()
            case SplitLine():
                self._split_line()
            case MoveCursor(dx=dx, dy=dy):
                self._move(dx, dy)
            case MoveCursorDown():
                if self._cursor.y < self.document.line_count - 1:
                    self._set_cursor(Cursor(0, self._cursor.y + 1))
            case MoveToLineStart():
                self._set_cursor(self._cursor.with_x(0))
            case MoveToLineEnd():
                self._set_cursor(
                    self._cursor.with_x(self.document.line_length(self._cursor.y))
                )
            case ApplyMotion(motion=motion):
                _, target = resolve(motion, self.document.snapshot(), self._cursor)
                self._set_cursor(target)
            case SwitchMode(target=target):
                self.modes.switch_mode(target)
                self.bus.emit(MODE_CHANGED, target)
            case ToggleSelection():
                if self._selection is None:
                    self._selection = Selection(self._cursor, self._cursor)
                else:
                    self._selection = None
            case Yank():
                self._yank()
            case Put():
                self._put()
            case AbortCurrentAction():
                self._selection = None
            case Save():
                self._request_save()
            case Exit():
                self._request_exit()
            case CompositeAction(actions=actions):
                # Recorded once as a whole; the parts are applied, not recorded.
                for sub_action in actions:
                    self._dispatch(sub_action, is_undo)
            case JumpToLine(line=line):
                self._jump_to_line(line)
            case Undo():
                self._undo()
            case NoOp():
                pass

    # Cursor handling

    def _set_cursor(self, position: Cursor) -> None:
        """Single entry point for cursor moves; drags the selection along."""

        self._cursor = clamp_cursor(self.document, position)
        if self._selection is not None:
            self._selection.set_end(self._cursor)

    def _move(self, dx: int, dy: int) -> None:
        for _ in range(abs(dx)):
            self._step_horizontal(1 if dx > 0 else -1)
        for _ in range(abs(dy)):
            self._step_vertical(1 if dy > 0 else -1)

    def _step_horizontal(self, step: int) -> None:
        cursor = self._cursor
        if step < 0:
            if cursor.x > 0:
                self._set_cursor(cursor.moved(dx=-1))
            return
        if cursor.x < self.document.line_length(cursor.y):
            self._set_cursor(cursor.moved(dx=1))

    def _step_vertical(self, step: int) -> None:
        target_row = self._cursor.y + step
        if 0 <= target_row < self.document.line_count:
            target = self._cursor.moved(dy=step)
            self._set_cursor(fit_column_to_line(self.document, target))

    def _jump_to_line(self, line: int) -> None:
        # ``line`` is 1-based: 3G lands on row index 2, 0G and 1G on row 0.
        row = max(line - 1, 0)
        if row >= self.document.line_count:
            return
        self._set_cursor(Cursor(0, row))

    # Edits

    def _add_char(self, ch: str) -> None:
        cursor = self._cursor
        self.document.insert_text(cursor.y, cursor.x, ch)
        self._set_cursor(cursor.moved(dx=len(ch)))

    def _delete_char(self) -> None:
        cursor = self._cursor
        if cursor.x > 0:
            self.document.delete_char(cursor.y, cursor.x - 1)
            self._set_cursor(cursor.moved(dx=-1))
        elif cursor.y > 0:
            seam = self.document.join_with_previous(cursor.y)
            self._set_cursor(Cursor(seam, cursor.y - 1))

    def _split_line(self) -> None:
        cursor = self._cursor
        self.document.split_line(cursor.y, cursor.x)
        self._set_cursor(Cursor(0, cursor.y + 1))

    def _yank(self) -> None:
        if self._selection is None:
            return
        text = selection_text(self.document.snapshot(), self._selection)
        self.register.yank(text)
        self._selection = None
        self.bus.emit(TEXT_YANKED, text)

    def _put(self) -> None:
        content = self.register.peek()
        if content is None:
            return
        self.document.insert_text(self._cursor.y, self._cursor.x, content)

    def _undo(self) -> None:
        undone = self.history.undo()
        if undone is None:
            return
        inverse, cursor = undone
        self._set_cursor(cursor)
        if inverse is not None:
            self.apply_action(inverse, is_undo=True)

    # Intents

    def _request_save(self) -> None:
        request = SaveRequest(name=self.name, lines=self.lines)
        telemetry.record_event(
            "engine.save",
            data={"buffer": self.name, "lines": len(request.lines)},
            logger_name="modal_engine.engine",
        )
        try:
            self.bus.emit(SAVE_REQUESTED, request)
        except OSError as exc:
            telemetry.record_event(
                "engine.save_failed",
                level="error",
                data={"buffer": self.name, "error": str(exc)},
                logger_name="modal_engine.engine",
            )
            return
        self.document.mark_clean()

    def _request_exit(self) -> None:
        self.exit_requested = True
        telemetry.record_event(
            "engine.exit",
            data={"buffer": self.name, "dirty": self.document.dirty},
            logger_name="modal_engine.engine",
        )
        self.bus.emit(EXIT_REQUESTED, None)


__all__ = ["EditorEngine"]
