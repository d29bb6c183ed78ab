"""result-kit: explicit Result and AsyncResult types for Python 3.13+.

Flat imports (preferred):
    from result_kit import Result, Ok, Err, AsyncResult
    from result_kit import resultify, async_resultify, to_async_result

Submodule imports (for organization):
    from result_kit.result import Ok, Err, Result
    from result_kit.async_ import AsyncResult
    from result_kit.decorators import resultify
    from result_kit.normalize import normalize_error
"""

# Configuration & logging
from result_kit._config import ResultConfig, get_config, init
from result_kit._logging import add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook

# Async
from result_kit.async_ import AsyncResult, to_async_result

# Factories
from result_kit.decorators import (
    async_resultify,
    create_async_result,
    resultify,
    to_result,
    to_result_async,
)

# Errors
from result_kit.errors import (
    BaseError,
    ContractViolation,
    ErrorInfo,
    ExpectFailed,
    UnwrapErrOnSuccess,
    UnwrapOnFailure,
)

# Normalization
from result_kit.normalize import ErrorLike, describe, is_error_like, normalize_error

# Result types
from result_kit.result import Err, Ok, Result

__all__ = [
    # Async
    'AsyncResult',
    # Errors
    'BaseError',
    'ContractViolation',
    # Result types
    'Err',
    'ErrorInfo',
    'ErrorLike',
    'ExpectFailed',
    'Ok',
    'Result',
    # Configuration
    'ResultConfig',
    'UnwrapErrOnSuccess',
    'UnwrapOnFailure',
    # Factories and logging
    'add_log_hook',
    'async_resultify',
    'clear_log_hooks',
    'configure_logging',
    'create_async_result',
    # Normalization
    'describe',
    'get_config',
    'get_logger',
    'init',
    'is_error_like',
    'normalize_error',
    'remove_log_hook',
    'resultify',
    'to_async_result',
    'to_result',
    'to_result_async',
]
