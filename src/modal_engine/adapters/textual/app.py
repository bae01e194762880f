"""Executable Textual app that hosts the modal editing engine."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_engine.adapters.textual.app"
    ) from exc

from modal_engine.buffer import BufferMirror, SaveRequest
from modal_engine.config import EngineConfig
from modal_engine.engine import EditorEngine
from modal_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

DEFAULT_FILENAME = "new_file.txt"


def load_lines(path: Path) -> List[str]:
    """Read ``path`` into lines; a missing or unreadable file starts empty."""

    try:
        return path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        telemetry.record_event(
            "app.load_failed",
            level="warning",
            data={"path": str(path), "error": str(exc)},
            logger_name="modal_engine.app",
        )
        return [""]


def write_lines(path: Path, request: SaveRequest) -> None:
    path.write_text(request.text, encoding="utf-8")


def render_buffer(mirror: BufferMirror) -> Text:
    """Render lines with the cursor and the selected span highlighted."""

    rendered = Text()
    start = end = None
    if mirror.selection is not None:
        start, end = sorted(mirror.selection)
    for row, line in enumerate(mirror.lines):
        text = Text(line + " ")
        if start is not None and end is not None and start.y <= row <= end.y:
            first = start.x if row == start.y else 0
            last = end.x if row == end.y else len(line)
            text.stylize("reverse blue", first, last + 1)
        if row == mirror.cursor.y:
            text.stylize("reverse", mirror.cursor.x, mirror.cursor.x + 1)
        rendered.append_text(text)
        if row < len(mirror.lines) - 1:
            rendered.append("\n")
    return rendered


class ModalEngineApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, path: Path, *, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self.path = path
        self.engine = EditorEngine(
            load_lines(path), name=str(path), config=config or EngineConfig.from_env()
        )
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.engine, hooks, host=self)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        event.stop()
        if self.adapter.is_quit_key(event.key):
            self.exit()
            return
        self.adapter.handle_textual_key(event.key, character=event.character)

    def save(self, request: SaveRequest) -> None:
        """Write the requested lines; an ``OSError`` reaches the engine."""

        write_lines(self.path, request)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "app.trace", level="debug", data={"line": line}, logger_name="modal_engine.app"
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file with the modal engine.")
    parser.add_argument(
        "file",
        nargs="?",
        default=os.environ.get("MODAL_ENGINE_FILE", DEFAULT_FILENAME),
        help=f"File to open (default: {DEFAULT_FILENAME})",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get("MODAL_ENGINE_LOG_FILE"),
        help="Send logs to this file instead of the terminal",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_file:
        settings = telemetry.LogSettings.from_env().to_file(args.log_file)
        telemetry.configure(settings=settings)
    app = ModalEngineApp(Path(args.file))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
