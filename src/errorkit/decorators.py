"""@recover and @recover_results decorators for error-returning functions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
from typing import Any, overload

import wrapt

from errorkit.safe import (
    Catch,
    Error,
    Handler,
    safe_exec,
    safe_exec_n,
    safe_exec_with_handler,
    safe_exec_with_handler_n,
)

__all__ = ['recover', 'recover_results']


@overload
def recover[**P](func: Callable[P, Error]) -> Callable[P, Error]: ...


@overload
def recover[**P](
    func: None = None,
    *,
    exceptions: Catch | None = None,
    handler: Handler | None = None,
) -> Callable[[Callable[P, Error]], Callable[P, Error]]: ...


def recover[**P](
    func: Callable[P, Error] | None = None,
    *,
    exceptions: Catch | None = None,
    handler: Handler | None = None,
) -> Any:
    """Decorator that runs an error-returning function through safe_exec.

    Can be used with or without arguments:
        @recover
        def flush(): ...

        @recover(exceptions=(OSError,), handler=log_error)
        def write(path): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Exception types to intercept. Defaults to the configured catch set.
        handler: If given, errors are passed to it and the call returns None.

    Returns:
        A wrapped function returning the error value instead of raising.

    Example:
        ```python
        @recover
        def check_ratio(a: int, b: int) -> Exception | None:
            return validate(a / b < 1, 'ratio %d/%d too large', a, b)

        check_ratio(1, 2)
        # None
        check_ratio(1, 0)
        # PanicError('panic occurred: ZeroDivisionError: division by zero ...')
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Error],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Error:
        call = partial(wrapped, *args, **kwargs)
        if handler is not None:
            safe_exec_with_handler(call, handler, exceptions=exceptions)
            return None
        return safe_exec(call, exceptions=exceptions)

    if func is not None:
        return wrapper(func)
    return wrapper


def recover_results(
    arity: int,
    *,
    defaults: Sequence[Any] | None = None,
    exceptions: Catch | None = None,
    handler: Handler | None = None,
) -> Callable[[Callable[..., Sequence[Any]]], Callable[..., tuple[Any, ...]]]:
    """Decorator for functions returning `arity` results followed by an error.

    Without a handler the decorated function returns (*results, err) as
    safe_exec_n does. With a handler the error goes to the handler and only
    the results are returned.

    Example:
        ```python
        @recover_results(2, defaults=(0, ''))
        def split_pair(text: str) -> tuple[int, str, Exception | None]:
            key, value = text.split('=')
            return int(key), value, None

        split_pair('1=a')
        # (1, 'a', None)
        split_pair('oops')
        # (0, '', PanicError(...))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Sequence[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[Any, ...]:
        call = partial(wrapped, *args, **kwargs)
        if handler is not None:
            return safe_exec_with_handler_n(call, handler, arity, defaults=defaults, exceptions=exceptions)
        return safe_exec_n(call, arity, defaults=defaults, exceptions=exceptions)

    return wrapper
