"""Structured logging for result-kit.

Every library logger is a structlog logger wrapped around a stdlib logger in
the ``result_kit`` namespace, so the host application's logging setup decides
what is shown. Records are debug level only: normalized exotic values and
exceptions captured by the factories. Nothing is emitted until DEBUG is
enabled for ``result_kit``, either by the application or through
``configure_logging`` / ``result_kit.init(log_level=...)``.

Log hooks see every library event whatever the level. Capture events carry
the exception itself under ``error``:

    def report(event: dict[str, Any]) -> None:
        if event['event'] == 'exception captured':
            tracker.capture(event['error'])

    add_log_hook(report)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'LOGGER_NAME',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

LOGGER_NAME = 'result_kit'

# Marks the handler installed by configure_logging so it can be replaced.
_HANDLER_NAME = 'result_kit.stderr'

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: BLE001, S110
            pass  # a failing hook must not break the caller
    return event_dict


def _library_processors() -> list[Any]:
    """Processor chain for library loggers; ends in plain stdlib logging calls."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _run_hooks,
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.render_to_log_kwargs,
    ]


def _get_renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def get_logger(name: str | None = None) -> Any:
    """Get a library logger.

    Args:
        name: Module name. Names outside the ``result_kit`` namespace are
            placed under it.

    Returns:
        A structlog BoundLogger over ``logging.getLogger(name)``.
    """
    if name is None:
        name = LOGGER_NAME
    elif name != LOGGER_NAME and not name.startswith(f'{LOGGER_NAME}.'):
        name = f'{LOGGER_NAME}.{name}'
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_library_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Render result-kit records to stderr with structlog.

    Only the ``result_kit`` logger is touched: it gets its own handler and
    level and stops propagating, so the root logger is left alone. Calling
    this again replaces the handler.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use console output.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False


# --- Logging Hooks ---


def add_log_hook(hook: LogHook) -> None:
    """Register a hook called with a copy of every library event dict.

    Hooks run before level filtering, so they see events even when logging
    is not configured.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered log hook."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()
