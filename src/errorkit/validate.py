"""validate: turn a failed precondition into a returned error.

Companion to the safe_exec family: instead of raising, a failed check hands
back an error value the caller returns alongside its results.
"""

from __future__ import annotations

from typing import Any

from errorkit.errors import ValidationError

__all__ = ['validate']


def validate(condition: bool, template: str, *args: Any) -> ValidationError | None:
    """Return None if condition holds, else a ValidationError with the formatted message.

    The template uses %-style placeholders and is formatted only when the
    condition fails. Without args the template is used as-is, so '100%' and
    '100%%' come back unchanged; with args, %-escapes apply as usual
    (validate(False, '%d%%', 5) gives '5%').

    Args:
        condition: The condition to check.
        template: Message template, e.g. 'user %s: age %d out of range'.
        *args: Positional values substituted into the template.

    Returns:
        None if condition is truthy, ValidationError otherwise.

    Example:
        ```python
        validate(True, 'never shown')
        # None

        validate(False, 'x:%s', 'y')
        # ValidationError('x:y')

        def load_user(name: str, age: int):
            if err := validate(age >= 0, 'age must be non-negative, got %d', age):
                return None, err
            return {'name': name, 'age': age}, None
        ```
    """
    if condition:
        return None

    message = template % args if args else template
    return ValidationError(message)
