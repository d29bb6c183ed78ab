"""Factories that turn raising functions into Result-returning ones.

- ``to_result`` / ``to_result_async``: run a zero-argument callable once and
  capture the raw exception. No normalization.
- ``resultify`` / ``async_resultify``: wrap a function, keeping its signature;
  caught exceptions are normalized and optionally passed through ``map_err``.
- ``create_async_result``: adapt a function returning Awaitable[Result] so it
  returns AsyncResult instead.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from result_kit._config import get_config
from result_kit._logging import get_logger
from result_kit.async_.result import AsyncResult, MaybeAwaitable
from result_kit.normalize import ErrorLike, normalize_error
from result_kit.result import Err, Ok, Result

__all__ = [
    'async_resultify',
    'create_async_result',
    'resultify',
    'to_result',
    'to_result_async',
]

logger = get_logger(__name__)

type Caught = BaseException | ErrorLike


def _catch_types(exceptions: tuple[type[BaseException], ...] | None) -> tuple[type[BaseException], ...]:
    return exceptions if exceptions is not None else get_config().catch


def _name_of(func: Any) -> str:
    return getattr(func, '__qualname__', None) or repr(func)


def to_result[T](fn: Callable[[], T]) -> Result[T, Exception]:
    """Call ``fn`` and capture its outcome.

    Unlike ``resultify``, the raised exception is kept exactly as raised and
    never normalized.

    Example:
        ```python
        to_result(lambda: int('7'))
        # Ok(value=7)
        to_result(lambda: int('x'))
        # Err(error=ValueError("invalid literal for int() with base 10: 'x'"))
        ```
    """
    try:
        return Ok(fn())
    except get_config().catch as e:
        return Err(e)  # type: ignore[arg-type]


async def to_result_async[T](fn: Callable[[], Awaitable[T]]) -> Result[T, Exception]:
    """Await ``fn()`` and capture its outcome; the raw exception is kept."""
    try:
        return Ok(await fn())
    except get_config().catch as e:
        return Err(e)  # type: ignore[arg-type]


@overload
def resultify[**P, T](
    func: Callable[P, T],
    map_err: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, Result[T, Caught]]: ...


@overload
def resultify[**P, T, F](
    func: Callable[P, T],
    map_err: Callable[[Caught], F],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, Result[T, F]]: ...


@overload
def resultify(
    func: None = None,
    map_err: Callable[[Caught], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Result[Any, Any]]]: ...


def resultify(
    func: Callable[..., Any] | None = None,
    map_err: Callable[[Caught], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Wrap a function so it returns Ok(value) or Err(normalized error).

    Can be used as a call or as a decorator, with or without arguments:
        safe_int = resultify(int)
        named = resultify(load, lambda e: e.name)

        @resultify
        def risky(): ...

        @resultify(map_err=str)
        def described(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        map_err: Applied to the normalized error before it is wrapped in Err.
            Never called on the success path.
        exceptions: Exception types to capture. Defaults to the configured
            ``catch`` tuple (``(Exception,)``); anything else propagates.

    Returns:
        A wrapper with the same signature that returns Result instead of raising.
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        try:
            return Ok(wrapped(*args, **kwargs))
        except _catch_types(exceptions) as e:
            logger.debug('exception captured', function=_name_of(wrapped), exc_type=type(e).__name__, error=e)
            error = normalize_error(e)
            return Err(map_err(error) if map_err is not None else error)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def async_resultify[**P, T](
    func: Callable[P, Awaitable[T]],
    map_err: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, AsyncResult[T, Caught]]: ...


@overload
def async_resultify[**P, T, F](
    func: Callable[P, Awaitable[T]],
    map_err: Callable[[Caught], MaybeAwaitable[F]],
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[P, AsyncResult[T, F]]: ...


@overload
def async_resultify(
    func: None = None,
    map_err: Callable[[Caught], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., AsyncResult[Any, Any]]]: ...


def async_resultify(
    func: Callable[..., Awaitable[Any]] | None = None,
    map_err: Callable[[Caught], Any] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Wrap an async function so it returns an AsyncResult.

    The wrapper is a plain function: calling it returns an AsyncResult at
    once, and the wrapped coroutine runs when that AsyncResult (or one chained
    from it) is first awaited. A raised exception is normalized, then passed
    through ``map_err``, which may itself be sync or async.

    Example:
        ```python
        @async_resultify(map_err=lambda e: str(e))
        async def fetch(url: str) -> bytes:
            ...

        body = await fetch('https://example.com').unwrap_or(b'')
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> AsyncResult[Any, Any]:
        catch = _catch_types(exceptions)

        async def _run() -> Result[Any, Caught]:
            try:
                return Ok(await wrapped(*args, **kwargs))
            except catch as e:
                logger.debug('exception captured', function=_name_of(wrapped), exc_type=type(e).__name__, error=e)
                return Err(normalize_error(e))

        result = AsyncResult(_run())
        if map_err is not None:
            return result.map_err(map_err)
        return result

    if func is not None:
        return wrapper(func)
    return wrapper


def create_async_result[**P, T, E](
    func: Callable[P, Awaitable[Result[T, E]]],
) -> Callable[P, AsyncResult[T, E]]:
    """Make a function returning Awaitable[Result] return AsyncResult instead.

    Example:
        ```python
        @create_async_result
        async def find(id: int) -> Result[User, str]:
            ...

        name = await find(1).map(lambda u: u.name).unwrap_or('?')
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Awaitable[Result[T, E]]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> AsyncResult[T, E]:
        return AsyncResult.from_result_awaitable(wrapped(*args, **kwargs))

    return wrapper(func)
