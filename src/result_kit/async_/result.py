"""AsyncResult type for async-aware Result operations.

AsyncResult wraps an Awaitable[Result[T, E]] and exposes the Result contract
without awaiting at every step: transformations return new AsyncResult
instances chained onto the original, and queries are coroutines.

Example:
    ```python
    async def fetch_user(id: int) -> User:
        ...

    name = await (
        to_async_result(fetch_user(1))
        .inspect_err(log_failure)
        .map(lambda user: user.name)
        .unwrap_or('anonymous')
    )
    ```
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import anyio

from result_kit._config import get_config
from result_kit._logging import get_logger
from result_kit.normalize import ErrorLike, normalize_error
from result_kit.result import Err, Ok, Result

__all__ = ['AsyncResult', 'to_async_result']

logger = get_logger(__name__)

type MaybeAwaitable[U] = U | Awaitable[U]


async def _resolve[U](value: MaybeAwaitable[U]) -> U:
    """Await a callback's return value if it is awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


def _lift[U, R](wrap: Callable[[U], R], value: MaybeAwaitable[U]) -> MaybeAwaitable[R]:
    """Apply ``wrap`` to a callback's return value, at once or after awaiting it."""
    if inspect.isawaitable(value):

        async def _awaited() -> R:
            return wrap(await value)

        return _awaited()
    return wrap(value)


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class _Shared[R]:
    """Settle-once node in a tree of chained AsyncResults.

    A root node holds the source awaitable, or a value that is already
    settled. A derived node holds a step that turns its parent's Result into
    its own.

    Nothing starts until some node of the tree is awaited. From then on each
    node runs in its own task, and a derived node runs as soon as its parent
    settles, whether or not anyone awaits it. Siblings receive the parent's
    outcome in the order they were chained. Consumers only wait on a node's
    task, so a cancelled consumer leaves the work, and every other consumer,
    untouched.
    """

    __slots__ = ('_children', '_parent', '_prev', '_settled', '_source', '_started', '_step', '_task', '_value')

    def __init__(
        self,
        source: Awaitable[R] | None = None,
        *,
        parent: _Shared[Any] | None = None,
        step: Callable[[Any], MaybeAwaitable[R]] | None = None,
    ) -> None:
        self._source = source
        self._parent = parent
        self._step = step
        self._prev: _Shared[Any] | None = None
        self._children: list[_Shared[Any]] = []
        self._started: anyio.Event | None = None
        self._task: asyncio.Task[R] | None = None
        self._settled = False
        self._value: R | None = None

    @classmethod
    def settled(cls, value: R) -> _Shared[R]:
        cell = cls()
        cell._value = value
        cell._settled = True
        return cell

    def derive[U](self, step: Callable[[R], MaybeAwaitable[U]]) -> _Shared[U]:
        """Chain a step onto this node; it runs once this node settles."""
        child: _Shared[U] = _Shared(parent=self, step=step)
        if self._children:
            child._prev = self._children[-1]
        self._children.append(child)
        if self._live() and _in_event_loop():
            self._trigger()
        return child

    def _live(self) -> bool:
        return self._settled or self._task is not None

    def _root(self) -> _Shared[Any]:
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    def _trigger(self) -> None:
        # Parents start before children and siblings in chain order.
        if not self._live():
            if self._parent is not None:
                self._started = anyio.Event()
            self._task = asyncio.create_task(self._run())
        for child in tuple(self._children):
            child._trigger()

    async def _run(self) -> R:
        if self._parent is None:
            source, self._source = self._source, None
            return await source  # type: ignore[misc]
        assert self._started is not None
        try:
            await self._parent._wait()
            outcome = self._parent._outcome()
            if self._prev is not None:
                await self._prev._started.wait()  # type: ignore[union-attr]
            pending = self._step(outcome)  # type: ignore[misc]
        finally:
            self._started.set()
        return await _resolve(pending)

    async def _wait(self) -> None:
        if self._task is not None:
            await asyncio.wait((self._task,))

    def _outcome(self) -> R:
        if self._task is None:
            return self._value  # type: ignore[return-value]
        return self._task.result()

    async def get(self) -> R:
        """Wait for the outcome; steps chained before this call have seen it first."""
        self._root()._trigger()
        await self._wait()
        for child in tuple(self._children):
            await child._started.wait()  # type: ignore[union-attr]
        return self._outcome()

    def __repr__(self) -> str:
        if self._task is None:
            return repr(self._value) if self._settled else '<pending>'
        if not self._task.done():
            return '<pending>'
        if self._task.cancelled():
            return '<cancelled>'
        exc = self._task.exception()
        if exc is not None:
            return f'<raised {exc!r}>'
        return repr(self._task.result())


class AsyncResult[T, E]:
    """Async-aware Result wrapper for composing async Result operations.

    AsyncResult holds a settle-once cell around an Awaitable[Result[T, E]].
    Awaiting it (``await ar``) yields the Result. Any number of consumers may
    await the same AsyncResult, or chain off it, and all observe the one
    settled Result; the wrapped awaitable runs at most once.

    Mappers, fallbacks and inspectors may be plain functions or return an
    awaitable; an awaitable return value is awaited before the chain continues.

    Note:
        Nothing runs until the AsyncResult (or one chained with it) is
        awaited. After that every chained step runs once its parent settles,
        in the order the chain was built, even if the step's own AsyncResult
        is never awaited. Work runs in asyncio tasks, so an asyncio event loop
        is required. Cancelling a consumer only stops that consumer. There is
        no timeout: if the source never settles, every chained AsyncResult
        stays pending.

    Example:
        ```python
        async def main():
            doubled = AsyncResult.from_ok(21).map(lambda x: x * 2)
            assert await doubled == Ok(42)
            assert await doubled.unwrap() == 42
        ```
    """

    __slots__ = ('_cell',)

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        """Create an AsyncResult from an awaitable.

        Args:
            awaitable: An awaitable that produces a Result[T, E].
        """
        self._cell: _Shared[Result[T, E]] = _Shared(awaitable)

    @classmethod
    def _of(cls, cell: _Shared[Result[T, E]]) -> AsyncResult[T, E]:
        ar = cls.__new__(cls)
        ar._cell = cell
        return ar

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Support await syntax to get the underlying Result."""
        return self._cell.get().__await__()

    # --- Constructors ---

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Create an already-settled AsyncResult from a synchronous Result."""
        return cls._of(_Shared.settled(result))

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an already-settled AsyncResult containing Ok(value)."""
        return cls.from_result(Ok(value))

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        """Create an already-settled AsyncResult containing Err(error)."""
        return cls.from_result(Err(error))

    @classmethod
    def from_awaitable(cls, awaitable: Awaitable[T]) -> AsyncResult[T, BaseException | ErrorLike]:
        """Convert the outcome of a plain awaitable into a Result.

        A returned value becomes Ok. A raised exception (of the configured
        catch types) is normalized and becomes Err; exceptions that are
        already proper errors are kept as the same instance.

        Args:
            awaitable: Any awaitable, e.g. a coroutine, Task or Future.

        Returns:
            AsyncResult settling to Ok(value) or Err(normalized error).
        """
        catch = get_config().catch

        async def _captured() -> Result[T, BaseException | ErrorLike]:
            try:
                return Ok(await awaitable)
            except catch as exc:
                logger.debug('exception captured', source='from_awaitable', exc_type=type(exc).__name__, error=exc)
                return Err(normalize_error(exc))

        return cls(_captured())

    @classmethod
    def from_result_awaitable(cls, awaitable: Awaitable[Result[T, E]]) -> AsyncResult[T, E]:
        """Wrap an awaitable that already produces a Result.

        Use this for async functions that report failure by returning Err
        rather than raising.
        """
        return cls(awaitable)

    # --- Queries ---

    async def is_ok(self) -> bool:
        """Return True if the settled Result is Ok."""
        return (await self._cell.get()).is_ok()

    async def is_err(self) -> bool:
        """Return True if the settled Result is Err."""
        return (await self._cell.get()).is_err()

    async def ok(self) -> T | None:
        """Return the Ok value, or None for Err."""
        return (await self._cell.get()).ok()

    async def err(self) -> E | None:
        """Return the error, or None for Ok."""
        return (await self._cell.get()).err()

    async def unwrap(self) -> T:
        """Return the Ok value.

        Raises:
            UnwrapOnFailure: If the settled Result is Err.
        """
        return (await self._cell.get()).unwrap()

    async def unwrap_err(self) -> E:
        """Return the error.

        Raises:
            UnwrapErrOnSuccess: If the settled Result is Ok.
        """
        return (await self._cell.get()).unwrap_err()

    async def unwrap_or(self, default: T) -> T:
        """Return the Ok value or ``default``."""
        return (await self._cell.get()).unwrap_or(default)

    async def unwrap_or_else(self, f: Callable[[E], MaybeAwaitable[T]]) -> T:
        """Return the Ok value, or compute one from the error.

        Args:
            f: Sync or async function of the error; not called for Ok.
        """
        result = await self._cell.get()
        if isinstance(result, Ok):
            return result.value
        return await _resolve(f(result.error))

    async def expect(self, msg: str) -> T:
        """Return the Ok value.

        Raises:
            ExpectFailed: If the settled Result is Err.
        """
        return (await self._cell.get()).expect(msg)

    async def expect_err(self, msg: str) -> E:
        """Return the error.

        Raises:
            ExpectFailed: If the settled Result is Ok.
        """
        return (await self._cell.get()).expect_err(msg)

    # --- Transformations ---

    def _then[U, F](self, step: Callable[[Result[T, E]], MaybeAwaitable[Result[U, F]]]) -> AsyncResult[U, F]:
        return AsyncResult._of(self._cell.derive(step))

    def map[U](self, f: Callable[[T], MaybeAwaitable[U]]) -> AsyncResult[U, E]:
        """Apply a sync or async function to the Ok value.

        If Err, the error passes through and ``f`` is not called.

        Example:
            ```python
            async def example():
                result = await AsyncResult.from_ok(5).map(lambda x: x * 2)
                assert result == Ok(10)
            ```
        """

        def _mapped(result: Result[T, E]) -> MaybeAwaitable[Result[U, E]]:
            if isinstance(result, Ok):
                return _lift(Ok, f(result.value))
            return result

        return self._then(_mapped)

    def map_err[F](self, f: Callable[[E], MaybeAwaitable[F]]) -> AsyncResult[T, F]:
        """Apply a sync or async function to the error.

        If Ok, the value passes through and ``f`` is not called.
        """

        def _mapped(result: Result[T, E]) -> MaybeAwaitable[Result[T, F]]:
            if isinstance(result, Err):
                return _lift(Err, f(result.error))
            return result

        return self._then(_mapped)

    def map_or_else[U](
        self,
        f: Callable[[T], MaybeAwaitable[U]],
        fallback: Callable[[E], MaybeAwaitable[U]],
    ) -> AsyncResult[U, E]:
        """Map Ok with ``f`` or recover Err with ``fallback``.

        The outcome is always Ok.
        """

        def _mapped(result: Result[T, E]) -> MaybeAwaitable[Result[U, E]]:
            if isinstance(result, Ok):
                return _lift(Ok, f(result.value))
            return _lift(Ok, fallback(result.error))

        return self._then(_mapped)

    def inspect(self, f: Callable[[T], Any]) -> AsyncResult[T, E]:
        """Call a sync or async ``f`` with the Ok value; the Result is unchanged."""

        def _inspected(result: Result[T, E]) -> MaybeAwaitable[Result[T, E]]:
            if isinstance(result, Ok):
                return _lift(lambda _: result, f(result.value))
            return result

        return self._then(_inspected)

    def inspect_err(self, f: Callable[[E], Any]) -> AsyncResult[T, E]:
        """Call a sync or async ``f`` with the error; the Result is unchanged."""

        def _inspected(result: Result[T, E]) -> MaybeAwaitable[Result[T, E]]:
            if isinstance(result, Err):
                return _lift(lambda _: result, f(result.error))
            return result

        return self._then(_inspected)

    def __repr__(self) -> str:
        return f'AsyncResult({self._cell!r})'


def to_async_result[T](awaitable: Awaitable[T]) -> AsyncResult[T, BaseException | ErrorLike]:
    """Convert an awaitable's value or raised exception into an AsyncResult.

    Shorthand for ``AsyncResult.from_awaitable``.
    """
    return AsyncResult.from_awaitable(awaitable)
