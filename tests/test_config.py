"""Tests for library configuration."""

from __future__ import annotations

import dataclasses
import os
from unittest.mock import patch

import pytest

from result_kit import AsyncResult, ResultConfig, get_config, init, resultify, to_result
from result_kit._config import _detect_json_logs, _detect_log_level


class TestResultConfig:
    """Tests for ResultConfig dataclass."""

    def test_default_values(self) -> None:
        config = ResultConfig()
        assert config.catch == (Exception,)
        assert config.log_level is None
        assert config.json_logs is True

    def test_custom_values(self) -> None:
        config = ResultConfig(catch=(OSError,), log_level='DEBUG', json_logs=False)
        assert config.catch == (OSError,)
        assert config.log_level == 'DEBUG'
        assert config.json_logs is False

    def test_config_is_frozen(self) -> None:
        config = ResultConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.log_level = 'DEBUG'  # type: ignore[misc]


class TestDetectLogLevel:
    """Tests for the RESULT_KIT_LOG_LEVEL environment variable."""

    def test_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_log_level() is None

    def test_case_insensitive(self) -> None:
        with patch.dict(os.environ, {'RESULT_KIT_LOG_LEVEL': 'debug'}):
            assert _detect_log_level() == 'DEBUG'

    def test_unknown_value_ignored(self) -> None:
        with patch.dict(os.environ, {'RESULT_KIT_LOG_LEVEL': 'chatty'}):
            assert _detect_log_level() is None


class TestDetectJsonLogs:
    """Tests for the RESULT_KIT_LOG_FORMAT environment variable."""

    def test_default_is_json(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_json_logs() is True

    def test_console(self) -> None:
        with patch.dict(os.environ, {'RESULT_KIT_LOG_FORMAT': 'Console'}):
            assert _detect_json_logs() is False

    def test_unknown_value_defaults_to_json(self) -> None:
        with patch.dict(os.environ, {'RESULT_KIT_LOG_FORMAT': 'xml'}):
            assert _detect_json_logs() is True


class TestInit:
    """Tests for init()."""

    def test_init_with_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = init()
        assert config == ResultConfig()

    def test_init_with_catch(self) -> None:
        assert init(catch=(LookupError,)).catch == (LookupError,)

    def test_init_empty_catch_raises(self) -> None:
        with pytest.raises(ValueError, match='at least one'):
            init(catch=())

    def test_init_with_log_level_configures_logging(self) -> None:
        with patch('result_kit._config.configure_logging') as configure:
            config = init(log_level='DEBUG', json_logs=False)
        assert config.log_level == 'DEBUG'
        configure.assert_called_once_with('DEBUG', json_output=False)

    def test_init_without_log_level_leaves_logging_alone(self) -> None:
        with patch.dict(os.environ, {}, clear=True), patch('result_kit._config.configure_logging') as configure:
            init()
        configure.assert_not_called()

    def test_env_log_level_used(self) -> None:
        env = {'RESULT_KIT_LOG_LEVEL': 'WARNING', 'RESULT_KIT_LOG_FORMAT': 'console'}
        with patch.dict(os.environ, env), patch('result_kit._config.configure_logging') as configure:
            config = init()
        assert config.log_level == 'WARNING'
        assert config.json_logs is False
        configure.assert_called_once_with('WARNING', json_output=False)

    def test_explicit_values_override_env(self) -> None:
        env = {'RESULT_KIT_LOG_LEVEL': 'WARNING', 'RESULT_KIT_LOG_FORMAT': 'console'}
        with patch.dict(os.environ, env), patch('result_kit._config.configure_logging'):
            config = init(log_level='ERROR', json_logs=True)
        assert config.log_level == 'ERROR'
        assert config.json_logs is True


class TestGetConfig:
    """Tests for get_config()."""

    def test_defaults_before_init(self) -> None:
        assert get_config() == ResultConfig()

    def test_after_init(self) -> None:
        config = init(catch=(OSError,))
        assert get_config() is config


class TestCatchConfiguration:
    """The configured catch tuple decides what the factories capture."""

    def test_to_result(self) -> None:
        init(catch=(KeyError,))
        assert to_result(lambda: {}['k']).is_err()
        with pytest.raises(ValueError):
            to_result(lambda: int('x'))

    def test_explicit_exceptions_win_over_config(self) -> None:
        init(catch=(KeyError,))
        assert resultify(int, exceptions=(ValueError,))('x').is_err()

    def test_wider_catch(self) -> None:
        class Abort(BaseException):
            pass

        def stop() -> None:
            raise Abort

        init(catch=(Exception, Abort))
        assert isinstance(resultify(stop)().err(), Abort)

    async def test_from_awaitable(self) -> None:
        async def broken() -> int:
            raise ValueError('v')

        init(catch=(KeyError,))
        with pytest.raises(ValueError):
            await AsyncResult.from_awaitable(broken())
