"""Library configuration: ErrorkitConfig, init, and environment detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from errorkit._logging import configure_logging

__all__ = [
    'ErrorkitConfig',
    'get_config',
    'init',
    'reset',
]

_FALSE_VALUES = ('0', 'false', 'no', 'off')
_TRUE_VALUES = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class ErrorkitConfig:
    """Process-wide defaults for the safe_exec family.

    Attributes:
        catch: Exception types converted into PanicError when no per-call
            `exceptions=` is given.
        capture_stack: Whether captured faults carry a formatted traceback.
        log_level: Logging level (e.g., "DEBUG", "WARNING"). None = silent.
    """

    catch: tuple[type[BaseException], ...] = (Exception,)
    capture_stack: bool = True
    log_level: str | None = None


_config: ErrorkitConfig | None = None


def _detect_capture_stack() -> bool:
    """Read ERRORKIT_CAPTURE_STACK, defaulting to True."""
    value = os.environ.get('ERRORKIT_CAPTURE_STACK', '').strip().lower()
    if not value or value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logging.warning("Unknown ERRORKIT_CAPTURE_STACK value '%s', capturing stacks", value)
    return True


def _detect_log_level() -> str | None:
    value = os.environ.get('ERRORKIT_LOG_LEVEL', '').strip()
    return value.upper() or None


def init(
    catch: tuple[type[BaseException], ...] | None = None,
    capture_stack: bool | None = None,
    log_level: str | None = None,
) -> ErrorkitConfig:
    """Initialize errorkit with the given configuration.

    Unspecified values come from the environment (ERRORKIT_CAPTURE_STACK,
    ERRORKIT_LOG_LEVEL), then from the ErrorkitConfig defaults.

    Args:
        catch: Default exception types to intercept.
        capture_stack: Whether to capture tracebacks into PanicError.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The ErrorkitConfig that was set.

    Example:
        ```python
        import errorkit

        errorkit.init(log_level='WARNING')
        errorkit.init(catch=(ValueError, KeyError), capture_stack=False)
        ```
    """
    global _config  # noqa: PLW0603

    _config = _build_config(catch, capture_stack, log_level)
    if _config.log_level is not None:
        configure_logging(_config.log_level)
    return _config


def _build_config(
    catch: tuple[type[BaseException], ...] | None,
    capture_stack: bool | None,
    log_level: str | None,
) -> ErrorkitConfig:
    return ErrorkitConfig(
        catch=catch if catch is not None else ErrorkitConfig.catch,
        capture_stack=capture_stack if capture_stack is not None else _detect_capture_stack(),
        log_level=log_level.upper() if log_level is not None else _detect_log_level(),
    )


def get_config() -> ErrorkitConfig:
    """Get the current configuration, building it from the environment on first use.

    The lazy path never configures logging: with only ERRORKIT_LOG_LEVEL set,
    events go to the 'errorkit' logger and the host's handlers decide where
    they end up.
    """
    global _config  # noqa: PLW0603
    if _config is None:
        _config = _build_config(None, None, None)
    return _config


def reset() -> None:
    """Forget the current configuration; the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
