"""Result type: Ok[T] | Err[E] for explicit error handling.

A Result is exactly one of two frozen variants: ``Ok`` holding a value or
``Err`` holding an error. Every transformation returns a Result; only the
assertion methods (``unwrap``, ``unwrap_err``, ``expect``, ``expect_err``)
ever raise.

Example:
    ```python
    from result_kit import Err, Ok, Result

    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Err(f'not a number: {raw!r}')
        return Ok(int(raw))

    match parse_port('8080').map(lambda p: p + 1):
        case Ok(port):
            print(port)  # 8081
        case Err(reason):
            print(reason)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from result_kit.errors import ContractViolation, ExpectFailed, UnwrapErrOnSuccess, UnwrapOnFailure
from result_kit.normalize import describe, normalize_error

if TYPE_CHECKING:
    from result_kit.async_.result import AsyncResult

__all__ = ['Err', 'Ok', 'Result']


def _nested(headline: str, label: str, value: object) -> str:
    return f'{headline}\n> {label}: {describe(value)}'


def _raise_chained(violation: ContractViolation, error: object) -> NoReturn:
    """Raise ``violation``, chained to the normalized error when that is an exception."""
    cause = normalize_error(error)
    if isinstance(cause, BaseException):
        raise violation from cause
    raise violation


class Ok[T](msgspec.Struct, frozen=True):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True; narrows the type to Ok[T]."""
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def ok(self) -> T:
        """Return the contained value."""
        return self.value

    def err(self) -> None:
        """Return None since this is Ok."""
        return None

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise since there is no error to return.

        Raises:
            UnwrapErrOnSuccess: Always, with the held value rendered in the message.
        """
        raise UnwrapErrOnSuccess(
            _nested('Tried to unwrap the error of a success result', 'Success value is', self.value),
            self.value,
        )

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value; ``f`` is never called."""
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise with the given message since this is Ok.

        Raises:
            ExpectFailed: Always, with ``msg`` and the rendered value.
        """
        raise ExpectFailed(_nested(msg, 'Success value is', self.value), self.value)

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def map_or_else[U](self, f: Callable[[T], U], fallback: Callable[[Any], U]) -> Ok[U]:  # noqa: ARG002
        """Map the value with ``f``; ``fallback`` is only used for Err.

        Returns:
            Ok(f(value)).
        """
        return Ok(f(self.value))

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Call ``f`` with the value for its side effects and return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def to_async(self) -> AsyncResult[T, Any]:
        """Lift into an already-settled AsyncResult."""
        from result_kit.async_.result import AsyncResult

        return AsyncResult.from_result(self)


class Err[E](msgspec.Struct, frozen=True):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True; narrows the type to Err[E]."""
        return True

    def ok(self) -> None:
        """Return None since this is Err."""
        return None

    def err(self) -> E:
        """Return the contained error."""
        return self.error

    def unwrap(self) -> NoReturn:
        """Raise since there is no value to return.

        The message ends with a nested rendering of the held error, and the
        normalized error is chained as ``__cause__`` when it is an exception.

        Raises:
            UnwrapOnFailure: Always.
        """
        _raise_chained(
            UnwrapOnFailure(
                _nested('Tried to unwrap a failure result', 'Original error is', self.error),
                self.error,
            ),
            self.error,
        )

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Compute a value from the error."""
        return f(self.error)

    def expect(self, msg: str) -> NoReturn:
        """Raise with a custom message.

        Args:
            msg: Headline of the raised error.

        Raises:
            ExpectFailed: Always, with ``msg`` and the rendered error.
        """
        _raise_chained(ExpectFailed(_nested(msg, 'Original error is', self.error), self.error), self.error)

    def expect_err(self, msg: str) -> E:  # noqa: ARG002
        """Return the contained error, ignoring the message."""
        return self.error

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def map_or_else[U](self, f: Callable[[Any], U], fallback: Callable[[E], U]) -> Ok[U]:  # noqa: ARG002
        """Recover with ``fallback``; the outcome is always an Ok.

        Returns:
            Ok(fallback(error)).
        """
        return Ok(fallback(self.error))

    def inspect(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Call ``f`` with the error for its side effects and return self."""
        f(self.error)
        return self

    def to_async(self) -> AsyncResult[Any, E]:
        """Lift into an already-settled AsyncResult."""
        from result_kit.async_.result import AsyncResult

        return AsyncResult.from_result(self)


type Result[T, E = Exception] = Ok[T] | Err[E]
