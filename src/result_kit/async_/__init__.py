"""Async utilities: AsyncResult and to_async_result.

Examples:
    >>> from result_kit.async_ import AsyncResult, to_async_result
    >>>
    >>> async def fetch(id: int) -> dict:
    ...     return {'id': id}
    >>>
    >>> async def main():
    ...     ident = await to_async_result(fetch(1)).map(lambda d: d['id']).unwrap()
"""

from result_kit.async_.result import AsyncResult, to_async_result

__all__ = [
    'AsyncResult',
    'to_async_result',
]
