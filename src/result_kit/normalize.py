"""Normalization of caught values into proper errors.

Anything a wrapped operation fails with is passed through ``normalize_error``
before it is exposed through an ``Err``. Exceptions and objects that already
look like errors are returned as-is; everything else is wrapped in a
``BaseError`` that keeps the original value.

Example:
    ```python
    normalize_error(ValueError('x'))   # the same ValueError instance
    normalize_error(1)                 # BaseError('Caught exotic value (number): 1')
    normalize_error([1, 2]).message    # 'Caught exotic value (array): [1, 2]'
    ```
"""

from __future__ import annotations

import numbers
import traceback
from collections.abc import Callable
from typing import Protocol, TypeIs

from result_kit._logging import get_logger
from result_kit.errors import BaseError

__all__ = [
    'ErrorLike',
    'describe',
    'exotic_message',
    'is_error_like',
    'normalize_error',
]

logger = get_logger(__name__)

# Checked in order; the first matching predicate names the kind.
_KINDS: tuple[tuple[str, Callable[[object], bool]], ...] = (
    ('none', lambda v: v is None),
    ('boolean', lambda v: isinstance(v, bool)),
    ('number', lambda v: isinstance(v, numbers.Number)),
    ('string', lambda v: isinstance(v, str)),
    ('bytes', lambda v: isinstance(v, bytes | bytearray)),
    ('array', lambda v: isinstance(v, list | tuple)),
    ('function', callable),
)

_LITERALS = (type(None), bool, numbers.Number, str, bytes, bytearray)


class ErrorLike(Protocol):
    """Structural contract of an error that crossed a library boundary.

    An object qualifies when it carries string ``name`` and ``message``
    attributes and its type overrides the default string conversion.
    """

    name: str
    message: str


def _has_string_form(value: object) -> bool:
    """Return True if the value's type overrides object's str/repr."""
    if value is None:
        return False
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


def _string_form(value: object) -> str | None:
    if not _has_string_form(value):
        return None
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - a broken __str__ just means no string form
        return None


def _kind_of(value: object) -> str:
    for kind, matches in _KINDS:
        if matches(value):
            return kind
    return 'object'


def is_error_like(value: object) -> TypeIs[ErrorLike]:
    """Check the ErrorLike contract explicitly.

    Args:
        value: Any object.

    Returns:
        True if ``value`` has str ``name`` and ``message`` attributes and a
        non-default string conversion.
    """
    return (
        isinstance(getattr(value, 'name', None), str)
        and isinstance(getattr(value, 'message', None), str)
        and _has_string_form(value)
    )


def exotic_message(value: object) -> str:
    """Build the BaseError message for a value that is not a proper error."""
    message = f'Caught exotic value ({_kind_of(value)})'
    text = _string_form(value)
    if text is not None:
        message = f'{message}: {text}'
    return message


def normalize_error(value: object) -> BaseException | ErrorLike:
    """Convert an arbitrary caught value into a proper error.

    Args:
        value: The caught value.

    Returns:
        ``value`` itself if it is an exception or satisfies ErrorLike,
        otherwise a ``BaseError`` whose ``orig_value`` is ``value``.
    """
    if isinstance(value, BaseException) or is_error_like(value):
        return value
    error = BaseError(value)
    logger.debug('exotic value normalized', kind=_kind_of(value), error_message=error.message)
    return error


def describe(value: object) -> str:
    """Render a held payload for the nested line of a contract-violation message.

    Exceptions render as their formatted traceback, literals as their repr,
    objects with a string form as that string, and anything else as a short
    notice naming its type. Continuation lines are indented by two spaces.
    """
    if isinstance(value, BaseException):
        text = ''.join(traceback.format_exception(value)).rstrip()
    elif isinstance(value, _LITERALS):
        text = repr(value)
    else:
        text = _string_form(value)
        if text is None:
            text = f'an object of type {type(value).__name__} with no string form'
    first, *rest = text.splitlines() or ['']
    return '\n'.join([first, *(f'  {line}' for line in rest)])
