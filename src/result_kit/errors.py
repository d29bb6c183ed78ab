"""Error types: the canonical caught-error shape and Result contract violations."""

from __future__ import annotations

import traceback
from typing import Any

import msgspec

__all__ = [
    'BaseError',
    'ContractViolation',
    'ErrorInfo',
    'ExpectFailed',
    'UnwrapErrOnSuccess',
    'UnwrapOnFailure',
]


# --- Canonical error ---


class ErrorInfo(msgspec.Struct, frozen=True, gc=False):
    """Serialisable snapshot of a BaseError - struct variant for logs and wire output."""

    name: str
    message: str
    stack: str | None = None
    orig_repr: str | None = None

    def to_exception(self) -> BaseError:
        """Rebuild an exception; the original value survives only as its repr."""
        return BaseError(self.orig_repr, message=self.message)


class BaseError(Exception):
    """Canonical error wrapping a caught value that was not a proper error.

    Attributes:
        name: Always ``'BaseError'``.
        message: ``Caught exotic value (<kind>)``, optionally followed by the
            value's string form.
        orig_value: The original value, kept verbatim.
    """

    name = 'BaseError'

    def __init__(self, orig_value: Any = None, *, message: str | None = None) -> None:
        self.orig_value = orig_value
        if message is None:
            from result_kit.normalize import exotic_message

            message = exotic_message(orig_value)
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.orig_value!r})'

    def to_struct(self) -> ErrorInfo:
        """Convert to struct for structured logging."""
        stack = None
        if self.__traceback__ is not None:
            stack = ''.join(traceback.format_tb(self.__traceback__))
        return ErrorInfo(
            name=self.name,
            message=self.message,
            stack=stack,
            orig_repr=repr(self.orig_value),
        )


# --- Contract violations ---


class ContractViolation(RuntimeError):
    """A Result assertion did not hold.

    Raised only by ``unwrap``, ``unwrap_err``, ``expect`` and ``expect_err``.
    The offending payload is kept in ``value``.
    """

    def __init__(self, message: str, value: Any) -> None:
        self.value = value
        super().__init__(message)


class UnwrapOnFailure(ContractViolation):
    """``unwrap()`` was called on an Err."""


class UnwrapErrOnSuccess(ContractViolation):
    """``unwrap_err()`` was called on an Ok."""


class ExpectFailed(ContractViolation):
    """``expect()`` hit an Err, or ``expect_err()`` hit an Ok."""
