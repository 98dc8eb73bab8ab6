"""Package-scoped structured logging for errorkit.

Wrapper events are built with structlog but emitted through the stdlib
``errorkit`` logger, so a host application's logging setup decides where they
go. Nothing here touches the root logger or structlog's global configuration.

    configure_logging('DEBUG')   # opt in to errorkit's own stderr output
    reset_logging()              # hand the 'errorkit' logger back to the host
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'PACKAGE_LOGGER',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
    'reset_logging',
]

PACKAGE_LOGGER = 'errorkit'

type Hook = Callable[[dict[str, Any]], None]

_log_hooks: list[Hook] = []
_handler: logging.Handler | None = None
_renderer: Any = structlog.processors.JSONRenderer()


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:
            pass  # hook failures never break logging
    return event_dict


def _render(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    return _renderer(logger, method_name, event_dict)


def _processors() -> list[Any]:
    """Processor chain for errorkit loggers, ending in a rendered string for stdlib."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        _run_hooks,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _render,
    ]


def get_logger(name: str = PACKAGE_LOGGER) -> Any:
    """Get a structlog logger over the stdlib logger `name`.

    Use names under 'errorkit' (e.g. 'errorkit.safe') so records follow the
    package logger's level and handler.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Send errorkit's events to a stream of its own.

    Sets the level of the 'errorkit' logger and attaches a single handler to
    it, replacing the one added by an earlier call. Records stop propagating
    to the root logger while the handler is attached, so they are not printed
    twice.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, render JSON. If False, use structlog's console renderer.
        stream: Destination stream. Defaults to sys.stderr.

    Returns:
        The handler attached to the 'errorkit' logger.
    """
    global _handler, _renderer  # noqa: PLW0603

    stream = stream if stream is not None else sys.stderr
    if json_output:
        _renderer = structlog.processors.JSONRenderer()
    else:
        _renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter('%(message)s'))
    package_logger.addHandler(_handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.propagate = False
    return _handler


def reset_logging() -> None:
    """Undo configure_logging: drop errorkit's handler and level, propagate again."""
    global _handler, _renderer  # noqa: PLW0603

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    _renderer = structlog.processors.JSONRenderer()


# --- Logging Hooks ---


def add_log_hook(hook: Hook) -> None:
    """Register a hook called with a copy of each emitted errorkit event."""
    _log_hooks.append(hook)


def remove_log_hook(hook: Hook) -> None:
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    _log_hooks.clear()
