"""Tests for package-scoped logging, hooks, and the events the wrappers emit."""

from __future__ import annotations

import io
import json
import logging
import os
from collections.abc import Iterator
from typing import Any
from unittest.mock import patch

import pytest
from errorkit import init, safe_exec, safe_exec_with_handler
from errorkit._config import reset
from errorkit._logging import (
    PACKAGE_LOGGER,
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
    reset_logging,
)


def boom():
    raise RuntimeError('panic test')


@pytest.fixture
def host_handler() -> Iterator[logging.Handler]:
    """A handler installed on the root logger by the host application."""
    root = logging.getLogger()
    handler = logging.NullHandler()
    root.addHandler(handler)
    yield handler
    root.removeHandler(handler)


class TestConfigureLogging:
    """Tests for configure_logging and reset_logging."""

    def test_root_logger_untouched(self, host_handler: logging.Handler) -> None:
        """Host handlers and level on the root logger survive configure_logging."""
        root = logging.getLogger()
        before = list(root.handlers)
        level = root.level

        configure_logging('DEBUG')

        assert root.handlers == before
        assert host_handler in root.handlers
        assert root.level == level

    def test_attaches_single_handler_to_package_logger(self) -> None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)

        first = configure_logging('INFO')
        second = configure_logging('DEBUG')

        assert first not in package_logger.handlers
        assert package_logger.handlers.count(second) == 1
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False

    def test_reset_logging_restores_package_logger(self) -> None:
        handler = configure_logging('DEBUG')
        reset_logging()

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert handler not in package_logger.handlers
        assert package_logger.level == logging.NOTSET
        assert package_logger.propagate is True

    def test_json_output_to_stream(self) -> None:
        stream = io.StringIO()
        configure_logging('INFO', stream=stream)

        get_logger('errorkit.tests').info('written', answer=42)

        entry = json.loads(stream.getvalue().strip())
        assert entry['event'] == 'written'
        assert entry['answer'] == 42
        assert entry['level'] == 'info'
        assert entry['logger'] == 'errorkit.tests'

    def test_level_filters_events(self) -> None:
        stream = io.StringIO()
        configure_logging('WARNING', stream=stream)

        get_logger('errorkit.tests').info('dropped')

        assert stream.getvalue() == ''


class TestLogHooks:
    """Tests for logging hooks functionality."""

    def test_hook_receives_log_events(self) -> None:
        """Registered hooks receive log entry dicts."""
        received: list[dict[str, Any]] = []

        configure_logging(level='DEBUG', stream=io.StringIO())
        add_log_hook(received.append)

        get_logger('errorkit.tests').info('Test message', extra_field='extra_value')

        entries = [e for e in received if e.get('event') == 'Test message']
        assert len(entries) == 1
        assert entries[0]['extra_field'] == 'extra_value'

    def test_remove_hook(self) -> None:
        """remove_log_hook() stops hook from being called."""
        calls: list[str] = []

        def hook(event_dict: dict[str, Any]) -> None:
            calls.append('called')

        configure_logging(level='DEBUG', stream=io.StringIO())
        add_log_hook(hook)

        logger = get_logger('errorkit.tests')
        logger.info('First')
        assert len(calls) == 1

        remove_log_hook(hook)
        logger.info('Second')
        assert len(calls) == 1

    def test_clear_hooks(self) -> None:
        calls: list[str] = []

        configure_logging(level='DEBUG', json_output=False, stream=io.StringIO())
        add_log_hook(lambda e: calls.append('hook1'))
        add_log_hook(lambda e: calls.append('hook2'))

        get_logger('errorkit.tests').info('First')
        assert calls == ['hook1', 'hook2']

        clear_log_hooks()
        get_logger('errorkit.tests').info('Second')
        assert calls == ['hook1', 'hook2']

    def test_hook_exception_does_not_break_logging(self) -> None:
        """Exceptions in hooks don't prevent other hooks from running."""
        calls: list[str] = []

        def bad_hook(event_dict: dict[str, Any]) -> None:
            raise RuntimeError('Hook failed')

        configure_logging(level='DEBUG', stream=io.StringIO())
        add_log_hook(bad_hook)
        add_log_hook(lambda e: calls.append('good'))

        get_logger('errorkit.tests').info('Test')
        assert calls == ['good']


class TestWrapperEvents:
    """Tests for events emitted by the safe_exec family."""

    def test_panic_recovered_logged(self) -> None:
        received: list[dict[str, Any]] = []
        stream = io.StringIO()
        with patch('errorkit._config.configure_logging', lambda level: configure_logging(level, stream=stream)):
            init(log_level='DEBUG')
        add_log_hook(received.append)

        safe_exec(boom)

        entries = [e for e in received if e.get('event') == 'panic_recovered']
        assert len(entries) == 1
        assert entries[0]['function'] == 'boom'
        assert entries[0]['error_type'] == 'RuntimeError'
        assert entries[0]['error'] == 'panic test'
        assert entries[0]['level'] == 'warning'
        assert isinstance(entries[0]['exc_info'], RuntimeError)

        rendered = json.loads(stream.getvalue().strip())
        assert rendered['event'] == 'panic_recovered'
        assert 'RuntimeError: panic test' in rendered['exception']

    def test_error_handled_logged(self) -> None:
        received: list[dict[str, Any]] = []
        with patch('errorkit._config.configure_logging', lambda level: configure_logging(level, stream=io.StringIO())):
            init(log_level='DEBUG')
        add_log_hook(received.append)

        safe_exec_with_handler(lambda: ValueError('returned'), lambda err: None)

        entries = [e for e in received if e.get('event') == 'error_handled']
        assert len(entries) == 1
        assert entries[0]['error_type'] == 'ValueError'

    def test_silent_without_log_level(self) -> None:
        """Nothing is logged when no log level is configured."""
        received: list[dict[str, Any]] = []
        configure_logging(level='DEBUG', stream=io.StringIO())
        add_log_hook(received.append)
        init()

        safe_exec(boom)
        safe_exec_with_handler(boom, lambda err: None)

        assert received == []

    def test_env_level_keeps_host_logging(self, host_handler: logging.Handler) -> None:
        """With only ERRORKIT_LOG_LEVEL set, a wrapper call leaves root handlers alone."""
        root = logging.getLogger()
        before = list(root.handlers)
        received: list[dict[str, Any]] = []
        add_log_hook(received.append)

        with patch.dict(os.environ, {'ERRORKIT_LOG_LEVEL': 'warning'}):
            reset()
            safe_exec(lambda: None)
            safe_exec(boom)

        assert root.handlers == before
        assert host_handler in root.handlers
        assert logging.getLogger(PACKAGE_LOGGER).handlers == []
        assert [e['event'] for e in received] == ['panic_recovered']

    def test_env_level_records_reach_host_handlers(self, caplog: pytest.LogCaptureFixture) -> None:
        """Events propagate to the host's handlers as rendered messages."""
        with patch.dict(os.environ, {'ERRORKIT_LOG_LEVEL': 'warning'}):
            reset()
            with caplog.at_level(logging.WARNING, logger=PACKAGE_LOGGER):
                safe_exec(boom)

        records = [r for r in caplog.records if r.name == 'errorkit.safe']
        assert len(records) == 1
        assert json.loads(records[0].getMessage())['event'] == 'panic_recovered'
