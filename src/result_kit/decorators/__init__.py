"""Factories: to_result, resultify, async_resultify and friends."""

from result_kit.decorators.resultify import (
    async_resultify,
    create_async_result,
    resultify,
    to_result,
    to_result_async,
)

__all__ = [
    'async_resultify',
    'create_async_result',
    'resultify',
    'to_result',
    'to_result_async',
]
