"""Actions that evaluate command-line text typed after ``:``."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from modal_engine.runtime import telemetry

from .core import Action, CompositeAction, Exit, Save, SwitchMode

CommandHandler = Callable[[], Action]


def _handle_write() -> Action:
    return CompositeAction.of(Save(), SwitchMode("normal"))


def _handle_quit() -> Action:
    return Exit()


def _handle_write_quit() -> Action:
    return CompositeAction.of(Save(), Exit())


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "q": _handle_quit,
    "wq": _handle_write_quit,
    "x": _handle_write_quit,
}


def lookup_command(text: str) -> Optional[CommandHandler]:
    return _COMMAND_HANDLERS.get(text)


def submit_command_line(text: str) -> Action:
    """Turn the typed command line into an action.

    Unknown commands are logged and fall back to returning to normal mode.
    """

    handler = lookup_command(text)
    if handler is None:
        telemetry.record_event(
            "command.unknown",
            level="warning",
            data={"command": text},
            logger_name="modal_engine.commands",
        )
        return SwitchMode("normal")
    return handler()


__all__ = ["lookup_command", "submit_command_line"]
