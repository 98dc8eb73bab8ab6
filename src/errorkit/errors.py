"""Error types: dual struct+exception for returned and serialized errors."""

from __future__ import annotations

from functools import partial
from typing import Any

import msgspec

__all__ = [
    'Invalid',
    'Panic',
    'PanicError',
    'ValidationError',
    'describe_payload',
    'format_panic',
]


def format_panic(payload_text: str, stack: str) -> str:
    """Build the message carried by a captured-fault error."""
    return f'panic occurred: {payload_text}\nStack trace:\n{stack}'


def describe_payload(payload: BaseException | None) -> str:
    """Render a caught exception as 'Type: message', or just 'Type' if it has no message."""
    if payload is None:
        return 'None'
    text = str(payload)
    name = type(payload).__name__
    return f'{name}: {text}' if text else name


# --- Validation Errors ---


class Invalid(msgspec.Struct, frozen=True, gc=False):
    """Precondition failed - struct variant."""

    message: str

    def to_exception(self) -> ValidationError:
        """Convert to exception for error-returning code."""
        return ValidationError(self.message)


class ValidationError(Exception):
    """Precondition failed - exception variant."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_struct(self) -> Invalid:
        """Convert to struct for serialization."""
        return Invalid(self.message)


# --- Captured Faults ---


class Panic(msgspec.Struct, frozen=True, gc=False):
    """Computation raised instead of returning - struct variant.

    Holds only text so it can be encoded with msgspec; the original exception
    object stays on the PanicError it came from.
    """

    payload_type: str
    payload_text: str
    stack: str = ''

    @property
    def message(self) -> str:
        return format_panic(self.payload_text, self.stack)

    def to_exception(self) -> PanicError:
        """Convert to exception. The payload object is not recoverable."""
        return PanicError(None, self.stack, payload_text=self.payload_text, payload_type=self.payload_type)


class PanicError(Exception):
    """Computation raised instead of returning - exception variant.

    Attributes:
        payload: The exception caught from the wrapped computation.
        stack: Formatted traceback captured when the exception was caught.
    """

    def __init__(
        self,
        payload: BaseException | None,
        stack: str = '',
        *,
        payload_text: str | None = None,
        payload_type: str | None = None,
    ) -> None:
        self.payload = payload
        self.stack = stack
        self.payload_text = payload_text if payload_text is not None else describe_payload(payload)
        if payload_type is None:
            payload_type = type(payload).__name__ if payload is not None else 'None'
        self.payload_type = payload_type
        super().__init__(format_panic(self.payload_text, stack))
        if isinstance(payload, BaseException):
            self.__cause__ = payload

    def __reduce__(self) -> tuple[Any, ...]:
        # args hold only the rendered message, so rebuild from the fields
        rebuild = partial(type(self), payload_text=self.payload_text, payload_type=self.payload_type)
        return rebuild, (self.payload, self.stack)

    def to_struct(self) -> Panic:
        """Convert to struct for serialization."""
        return Panic(self.payload_type, self.payload_text, self.stack)
