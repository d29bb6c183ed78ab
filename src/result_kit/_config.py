"""Library configuration: ResultConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from result_kit._logging import configure_logging

__all__ = [
    'ResultConfig',
    'get_config',
    'init',
]

_LOG_LEVEL_ENV = 'RESULT_KIT_LOG_LEVEL'
_LOG_FORMAT_ENV = 'RESULT_KIT_LOG_FORMAT'
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class ResultConfig:
    """Configuration for result-kit.

    Attributes:
        catch: Exception types the factories and ``AsyncResult.from_awaitable``
            turn into Err. Anything else propagates.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
        json_logs: Render logs as JSON (True) or for the console (False).
    """

    catch: tuple[type[BaseException], ...] = field(default=(Exception,))
    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init())
_config: ResultConfig | None = None


def _detect_log_level() -> str | None:
    """Read the log level from RESULT_KIT_LOG_LEVEL, ignoring unknown values."""
    level = os.environ.get(_LOG_LEVEL_ENV, '').upper()
    if not level:
        return None
    if level not in _LOG_LEVELS:
        logging.warning("Unknown %s value '%s', logging left unconfigured", _LOG_LEVEL_ENV, level)
        return None
    return level


def _detect_json_logs() -> bool:
    """Read the log format from RESULT_KIT_LOG_FORMAT ("json" or "console")."""
    fmt = os.environ.get(_LOG_FORMAT_ENV, 'json').lower()
    if fmt not in ('json', 'console'):
        logging.warning("Unknown %s value '%s', defaulting to json", _LOG_FORMAT_ENV, fmt)
        return True
    return fmt == 'json'


def init(
    *,
    catch: tuple[type[BaseException], ...] | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> ResultConfig:
    """Initialize result-kit with the given configuration.

    Values left as None fall back to the environment
    (RESULT_KIT_LOG_LEVEL, RESULT_KIT_LOG_FORMAT) and then to defaults.
    If a log level ends up set, structured logging is configured.

    Args:
        catch: Exception types to capture as Err.
        log_level: Logging level to configure.
        json_logs: JSON (True) or console (False) log output.

    Returns:
        The active ResultConfig.
    """
    global _config

    if catch is not None and not catch:
        raise ValueError('catch must name at least one exception type')

    config = ResultConfig(
        catch=catch if catch is not None else (Exception,),
        log_level=log_level if log_level is not None else _detect_log_level(),
        json_logs=json_logs if json_logs is not None else _detect_json_logs(),
    )

    if config.log_level is not None:
        configure_logging(config.log_level, json_output=config.json_logs)

    _config = config
    return config


def get_config() -> ResultConfig:
    """Get the active configuration, or the defaults if init() was never called."""
    if _config is None:
        return ResultConfig()
    return _config


def _reset() -> None:
    """Forget the active configuration (used by tests)."""
    global _config
    _config = None
