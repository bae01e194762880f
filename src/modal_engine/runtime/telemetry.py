"""Logging and tracing for the engine, built on telelog.

``configure`` picks the sink (environment, a named preset, explicit
``LogSettings`` or a ready telelog config); ``record_event`` and ``span`` are
what the engine, the modes and the host adapter call.

Environment (``MODAL_ENGINE_`` prefix): ``LOG_LEVEL``, ``LOG_FILE``,
``LOG_JSON``, ``DISABLE_CONSOLE``, ``NO_COLOR``, ``LOG_BUFFERED``,
``LOG_BUFFER_SIZE``. The terminal demo owns the screen, so pointing
``LOG_FILE`` somewhere and disabling the console keeps logs off it.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_ENGINE_"
ROOT_LOGGER = "modal_engine"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class LogSettings:
    """Where engine logs go and how they look."""

    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: Optional[str] = None
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.lower() in _TRUTHY

        raw_size = env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE") or "2048"
        try:
            buffer_size = int(raw_size)
        except ValueError as exc:
            raise ValueError(f"{ENV_PREFIX}LOG_BUFFER_SIZE must be an integer") from exc
        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=not flag("DISABLE_CONSOLE", False),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=buffer_size,
        )

    @classmethod
    def preset(cls, name: str) -> "LogSettings":
        match name.lower():
            case "development":
                return cls(level="DEBUG")
            case "production":
                return cls(
                    console=False,
                    log_file=os.getenv(f"{ENV_PREFIX}LOG_FILE") or "modal_engine.log",
                    buffered=True,
                )
        raise ValueError(f"Unknown preset '{name}'.")

    def to_file(self, path: str) -> "LogSettings":
        """Same settings, but written to ``path`` with the console off."""

        return replace(self, console=False, log_file=path)

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


class _LoggerRegistry:
    def __init__(self) -> None:
        self.config: Any = None
        self.loggers: Dict[str, Any] = {}

    def reset(self, config: Any) -> None:
        self.config = config
        self.loggers.clear()

    def get(self, name: str) -> Any:
        if self.config is None:
            self.config = LogSettings.from_env().build()
        if name not in self.loggers:
            self.loggers[name] = tl.Logger.with_config(name, self.config)
        return self.loggers[name]


_registry = _LoggerRegistry()


def configure(
    *,
    settings: Optional[LogSettings] = None,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
) -> None:
    """Swap the active telelog configuration; loggers are rebuilt lazily.

    At most one source may be given. With none, the environment decides.
    """

    chosen = [source for source in (settings, config, preset) if source is not None]
    if len(chosen) > 1:
        raise ValueError("Pass only one of `settings`, `config` or `preset`.")
    if preset is not None:
        settings = LogSettings.preset(preset)
    if config is None:
        config = (settings or LogSettings.from_env()).build()
    _registry.reset(config)


def get_logger(name: Optional[str] = None) -> Any:
    return _registry.get(name or ROOT_LOGGER)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _write(log: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in fields.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _write(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects extra metadata and reports failures."""

    log: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        fields: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            fields["component"] = self.component
        _write(self.log, "error", "span::fail", fields)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` tracks it as a component of the same name; a string
    names the component explicitly. ``metadata`` is attached to the logger
    context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else (component or None)
    context: List[Tuple[str, str]] = [
        (key, _text(value)) for key, value in (metadata or {}).items()
    ]
    for key, value in context:
        log.add_context(key, value)

    handle = SpanHandle(log=log, name=name, component=component_name, metadata=dict(context))
    try:
        with ExitStack() as stack:
            if component_name:
                stack.enter_context(log.track_component(component_name))
            stack.enter_context(log.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key, _ in context:
            log.remove_context(key)


__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
