"""Developer diagnostics for the workspace, written through telelog.

Everything here is for whoever debugs the tool. What the operator sees
lives in :class:`~acpi_workspace.workspace.oplog.OperationLog` instead.

Environment knobs, all prefixed ``ACPI_WORKSPACE_``:

``LOG_LEVEL``        minimum level, ``INFO`` when unset
``DIAG_FILE``        also write diagnostics to this file
``DISABLE_CONSOLE``  keep diagnostics off stderr outside the TUI
``NO_COLOR``         plain console output
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "ACPI_WORKSPACE_"
DEFAULT_LOGGER_NAME = "acpi_workspace"

# The TUI owns the terminal, so its preset never writes to the console.
PRESETS = ("tui",)

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", "")


def _enabled(name: str) -> bool:
    return _setting(name).lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _build_config(*, console: bool) -> Any:
    config = tl.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "INFO").upper())
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    diag_file = _setting("DIAG_FILE")
    if diag_file:
        config.with_file_output(diag_file)
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the telelog configuration every later ``get_logger`` call uses.

    ``config`` adopts a ready ``telelog.Config``; ``preset`` picks one of
    :data:`PRESETS`. With neither, the environment decides.
    """

    global _config
    if config is not None and preset is not None:
        raise ValueError("pass either config or preset, not both")
    if preset is not None and preset not in PRESETS:
        raise ValueError(f"unknown telemetry preset {preset!r}")

    if preset is not None:
        config = _build_config(console=False)
    elif config is None:
        config = _build_config(console=not _enabled("DISABLE_CONSOLE"))
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _loggers:
        if _config is None:
            configure()
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"unsupported log level {level!r}")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(
        get_logger(logger_name),
        level.lower(),
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component`` also tracks it as a telelog component (``True`` reuses
    ``name``). ``metadata`` is attached as logger context for the duration
    of the block. An escaping exception is logged through
    :meth:`SpanHandle.fail` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
