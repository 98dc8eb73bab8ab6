"""safe_exec family: run a computation, turn anything it raises into a returned error.

Computations follow the error-as-value convention: they return their results
followed by an error slot (None when there is no error), e.g.

    def lookup() -> tuple[User, Exception | None]: ...

The wrappers pass a normal return through untouched. When the computation
raises one of the caught exception types instead of returning, the exception
is converted into a PanicError, every result slot is filled with its default
(None unless given), and nothing is raised to the caller.

The handler variants hand a non-None error to a callback instead of
returning it; only the results come back.

Example:
    ```python
    from errorkit import safe_exec1, safe_exec_with_handler1

    def parse_port(text: str) -> tuple[int, Exception | None]:
        return int(text), None

    safe_exec1(lambda: parse_port('8080'))
    # (8080, None)

    port, err = safe_exec1(lambda: parse_port('http'))
    # port is None, err is PanicError('panic occurred: ValueError: ...')

    port = safe_exec_with_handler1(lambda: parse_port('http'), log.error, default=80)
    # port == 80, log.error was called with the PanicError
    ```
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Sequence
from typing import Any

from errorkit._config import get_config
from errorkit._logging import get_logger
from errorkit.errors import PanicError

__all__ = [
    'safe_exec',
    'safe_exec0',
    'safe_exec1',
    'safe_exec2',
    'safe_exec3',
    'safe_exec_n',
    'safe_exec_with_handler',
    'safe_exec_with_handler0',
    'safe_exec_with_handler1',
    'safe_exec_with_handler2',
    'safe_exec_with_handler3',
    'safe_exec_with_handler_n',
]

type Error = BaseException | None
type Handler = Callable[[BaseException], Any]
type Catch = tuple[type[BaseException], ...]

_logger = get_logger(__name__)


def _describe(fn: Any) -> str:
    target = getattr(fn, 'func', fn)  # unwrap functools.partial
    return getattr(target, '__qualname__', None) or repr(target)


def _catch_set(exceptions: Catch | None) -> Catch:
    return exceptions if exceptions is not None else get_config().catch


def _recovered(exc: BaseException, fn: Any) -> PanicError:
    """Fold a caught exception and its traceback into a PanicError."""
    config = get_config()
    stack = ''.join(traceback.format_exception(exc)) if config.capture_stack else ''
    if config.log_level is not None:
        _logger.warning(
            'panic_recovered',
            function=_describe(fn),
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=exc if config.capture_stack else None,
        )
    return PanicError(exc, stack)


def _handle(err: BaseException, handler: Handler, fn: Any) -> None:
    if get_config().log_level is not None:
        _logger.debug('error_handled', function=_describe(fn), error_type=type(err).__name__)
    handler(err)


def _default_slots(arity: int, defaults: Sequence[Any] | None) -> tuple[Any, ...]:
    if arity < 0:
        msg = f'arity must be non-negative, got {arity}'
        raise ValueError(msg)
    if defaults is None:
        return (None,) * arity
    slots = tuple(defaults)
    if len(slots) != arity:
        msg = f'expected {arity} defaults, got {len(slots)}'
        raise ValueError(msg)
    return slots


# --- Core ---


def safe_exec(fn: Callable[[], Error], *, exceptions: Catch | None = None) -> Error:
    """Call fn and return its error, converting a raised exception into PanicError.

    Args:
        fn: Zero-argument computation returning an error or None.
        exceptions: Exception types to intercept. Defaults to the configured
            catch set, (Exception,) unless changed with init().

    Returns:
        The error fn returned (unchanged), a PanicError if fn raised, or None.
    """
    catch = _catch_set(exceptions)
    try:
        return fn()
    except catch as exc:
        return _recovered(exc, fn)


def safe_exec0(fn: Callable[[], Any], *, exceptions: Catch | None = None) -> Error:
    """Like safe_exec, for a computation with no results and no error slot.

    Whatever fn returns is ignored; the result is None unless fn raised.
    """
    catch = _catch_set(exceptions)
    try:
        fn()
    except catch as exc:
        return _recovered(exc, fn)
    return None


def safe_exec_n(
    fn: Callable[[], Sequence[Any]],
    arity: int,
    *,
    defaults: Sequence[Any] | None = None,
    exceptions: Catch | None = None,
) -> tuple[Any, ...]:
    """Call fn returning `arity` results plus an error, recovering from exceptions.

    Args:
        fn: Zero-argument computation returning (r1, ..., rN, err).
        arity: Number of results before the error slot.
        defaults: Values for the result slots when fn raises. Defaults to None
            for every slot.
        exceptions: Exception types to intercept.

    Returns:
        fn's return value as a tuple when it returned normally, otherwise
        (*defaults, PanicError). A str or bytes return, or any value that is
        not a sequence of arity + 1 items, counts as a fault.

    Raises:
        ValueError: If arity is negative or defaults has the wrong length.
    """
    slots = _default_slots(arity, defaults)
    catch = _catch_set(exceptions)
    try:
        value = fn()
        if isinstance(value, (str, bytes, bytearray)):
            msg = f'expected {arity} results and an error, got {type(value).__name__}'
            raise TypeError(msg)
        returned = tuple(value)
        if len(returned) != arity + 1:
            msg = f'expected {arity} results and an error, got {len(returned)} values'
            raise ValueError(msg)
    except catch as exc:
        return (*slots, _recovered(exc, fn))
    return returned


def safe_exec1[T](
    fn: Callable[[], tuple[T, Error]],
    *,
    default: T | None = None,
    exceptions: Catch | None = None,
) -> tuple[T | None, Error]:
    """Call fn returning (result, err); on exception return (default, PanicError)."""
    result, err = safe_exec_n(fn, 1, defaults=(default,), exceptions=exceptions)
    return result, err


def safe_exec2[T1, T2](
    fn: Callable[[], tuple[T1, T2, Error]],
    *,
    defaults: tuple[T1, T2] | None = None,
    exceptions: Catch | None = None,
) -> tuple[T1 | None, T2 | None, Error]:
    """Call fn returning (r1, r2, err); on exception return (*defaults, PanicError)."""
    result1, result2, err = safe_exec_n(fn, 2, defaults=defaults, exceptions=exceptions)
    return result1, result2, err


def safe_exec3[T1, T2, T3](
    fn: Callable[[], tuple[T1, T2, T3, Error]],
    *,
    defaults: tuple[T1, T2, T3] | None = None,
    exceptions: Catch | None = None,
) -> tuple[T1 | None, T2 | None, T3 | None, Error]:
    """Call fn returning (r1, r2, r3, err); on exception return (*defaults, PanicError)."""
    result1, result2, result3, err = safe_exec_n(fn, 3, defaults=defaults, exceptions=exceptions)
    return result1, result2, result3, err


# --- Handler variants ---


def safe_exec_with_handler(
    fn: Callable[[], Error],
    handler: Handler,
    *,
    exceptions: Catch | None = None,
) -> None:
    """Run fn via safe_exec and pass any error to handler.

    The handler is called at most once and is not itself protected: an
    exception it raises propagates to the caller.
    """
    err = safe_exec(fn, exceptions=exceptions)
    if err is not None:
        _handle(err, handler, fn)


def safe_exec_with_handler0(
    fn: Callable[[], Any],
    handler: Handler,
    *,
    exceptions: Catch | None = None,
) -> None:
    """Run fn via safe_exec0 and pass any error to handler."""
    err = safe_exec0(fn, exceptions=exceptions)
    if err is not None:
        _handle(err, handler, fn)


def safe_exec_with_handler_n(
    fn: Callable[[], Sequence[Any]],
    handler: Handler,
    arity: int,
    *,
    defaults: Sequence[Any] | None = None,
    exceptions: Catch | None = None,
) -> tuple[Any, ...]:
    """Run fn via safe_exec_n, pass any error to handler, and return only the results.

    Results are returned as produced by safe_exec_n whether or not the
    handler ran, so a computation that returned (value, err) still yields value.
    """
    *results, err = safe_exec_n(fn, arity, defaults=defaults, exceptions=exceptions)
    if err is not None:
        _handle(err, handler, fn)
    return tuple(results)


def safe_exec_with_handler1[T](
    fn: Callable[[], tuple[T, Error]],
    handler: Handler,
    *,
    default: T | None = None,
    exceptions: Catch | None = None,
) -> T | None:
    """Run fn via safe_exec1, pass any error to handler, and return the result."""
    (result,) = safe_exec_with_handler_n(fn, handler, 1, defaults=(default,), exceptions=exceptions)
    return result


def safe_exec_with_handler2[T1, T2](
    fn: Callable[[], tuple[T1, T2, Error]],
    handler: Handler,
    *,
    defaults: tuple[T1, T2] | None = None,
    exceptions: Catch | None = None,
) -> tuple[T1 | None, T2 | None]:
    """Run fn via safe_exec2, pass any error to handler, and return both results."""
    result1, result2 = safe_exec_with_handler_n(fn, handler, 2, defaults=defaults, exceptions=exceptions)
    return result1, result2


def safe_exec_with_handler3[T1, T2, T3](
    fn: Callable[[], tuple[T1, T2, T3, Error]],
    handler: Handler,
    *,
    defaults: tuple[T1, T2, T3] | None = None,
    exceptions: Catch | None = None,
) -> tuple[T1 | None, T2 | None, T3 | None]:
    """Run fn via safe_exec3, pass any error to handler, and return all three results."""
    result1, result2, result3 = safe_exec_with_handler_n(fn, handler, 3, defaults=defaults, exceptions=exceptions)
    return result1, result2, result3
