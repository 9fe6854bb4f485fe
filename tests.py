#!/usr/bin/env python3
"""
MicroPause Test Suite v1.0.0
============================
Validates configuration, structured logging, error handling and code
quality guardrails.

Run with: python -m pytest tests.py -v
Or standalone: python tests.py
"""

import os
import re
import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from config_logging import (
    AppConfig, StructuredLogger, JsonFormatter, VERSION,
    MicroPauseError, ConfigurationError, GrammarServiceError,
    fail_open, get_config, reset_config,
)

PROJECT_ROOT = Path(__file__).parent


class TestAppConfig(unittest.TestCase):
    """Test application configuration."""

    def tearDown(self):
        reset_config()

    def test_defaults(self):
        """
        Test default configuration values.

        Expects: INFO level, JSON format, console logging only.
        """
        config = AppConfig()
        self.assertEqual(config.log_level, 'INFO')
        self.assertEqual(config.log_format, 'json')
        self.assertTrue(config.log_to_console)
        self.assertFalse(config.log_to_file)

    def test_unknown_level_falls_back_to_info(self):
        config = AppConfig(log_level='verbose')
        self.assertEqual(config.log_level, 'INFO')

    def test_level_is_uppercased(self):
        self.assertEqual(AppConfig(log_level='debug').log_level, 'DEBUG')

    def test_from_env(self):
        """
        Test configuration is read from MP_* environment variables.

        Expects: level, format and console flag follow the environment.
        """
        env = {'MP_LOG_LEVEL': 'warning', 'MP_LOG_FORMAT': 'text', 'MP_LOG_TO_CONSOLE': 'false'}
        with patch.dict(os.environ, env):
            config = AppConfig.from_env()
        self.assertEqual(config.log_level, 'WARNING')
        self.assertEqual(config.log_format, 'text')
        self.assertFalse(config.log_to_console)

    def test_validate_rejects_bad_format(self):
        ok, errors = AppConfig(log_format='xml').validate()
        self.assertFalse(ok)
        self.assertEqual(len(errors), 1)

    def test_validate_requires_a_destination(self):
        ok, errors = AppConfig(log_to_console=False, log_to_file=False).validate()
        self.assertFalse(ok)
        self.assertIn('log_to_console', errors[0])

    def test_log_dir_created_only_for_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / 'logs'
            AppConfig(log_dir=target)
            self.assertFalse(target.exists())
            AppConfig(log_dir=target, log_to_file=True)
            self.assertTrue(target.is_dir())

    def test_get_config_is_cached(self):
        reset_config()
        self.assertIs(get_config(), get_config())


class TestStructuredLogging(unittest.TestCase):
    """Test JSON structured logging."""

    def _capture(self, logger: StructuredLogger) -> io.StringIO:
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonFormatter())
        logger.logger.handlers = [handler]
        return stream

    def test_json_record_fields(self):
        """
        Test a logged message is one JSON object with context fields.

        Expects: level, logger, correlation_id, message and extra kwargs.
        """
        logger = StructuredLogger('test', AppConfig(log_level='DEBUG'))
        stream = self._capture(logger)
        StructuredLogger.set_correlation_id('abc123')

        logger.info("hello", delay_seconds=7)

        record = json.loads(stream.getvalue().strip())
        self.assertEqual(record['level'], 'INFO')
        self.assertEqual(record['logger'], 'test')
        self.assertEqual(record['correlation_id'], 'abc123')
        self.assertEqual(record['message'], 'hello')
        self.assertEqual(record['delay_seconds'], 7)

    def test_level_filtering(self):
        logger = StructuredLogger('quiet', AppConfig(log_level='ERROR'))
        stream = self._capture(logger)
        logger.info("dropped")
        self.assertEqual(stream.getvalue(), '')

    def test_new_correlation_id(self):
        first = StructuredLogger.new_correlation_id()
        second = StructuredLogger.new_correlation_id()
        self.assertNotEqual(first, second)
        self.assertEqual(StructuredLogger.get_correlation_id(), second)

    def test_log_operation_records_failure(self):
        """
        Test log_operation re-raises and logs a failed status.

        Expects: the exception propagates and the record says 'failed'.
        """
        logger = StructuredLogger('ops', AppConfig(log_level='DEBUG'))
        stream = self._capture(logger)

        with self.assertRaises(RuntimeError):
            with logger.log_operation('demo'):
                raise RuntimeError("boom")

        records = [json.loads(line) for line in stream.getvalue().splitlines()]
        self.assertEqual(records[-1]['status'], 'failed')
        self.assertIn('traceback', records[-1])

    def test_formatter_wraps_plain_messages(self):
        record = logging.LogRecord('x', logging.WARNING, __file__, 1, 'plain text', None, None)
        data = json.loads(JsonFormatter().format(record))
        self.assertEqual(data['message'], 'plain text')
        self.assertEqual(data['level'], 'WARNING')


class TestErrorHandling(unittest.TestCase):
    """Test exception hierarchy and fail-open helper."""

    def test_error_payload(self):
        """
        Test MicroPauseError serializes to the standard error payload.

        Expects: success False with code, message and details.
        """
        error = ConfigurationError("bad delay", field='base_delay_seconds')
        payload = error.to_dict()
        self.assertFalse(payload['success'])
        self.assertEqual(payload['error']['code'], 'CONFIG_ERROR')
        self.assertEqual(payload['error']['details']['field'], 'base_delay_seconds')

    def test_grammar_service_error_keeps_status(self):
        error = GrammarServiceError("down", status_code=503)
        self.assertIsInstance(error, MicroPauseError)
        self.assertEqual(error.status_code, 503)
        self.assertEqual(error.code, 'GRAMMAR_SERVICE_ERROR')

    def test_fail_open_returns_default(self):
        @fail_open(list)
        def broken():
            raise GrammarServiceError("unreachable")

        self.assertEqual(broken(), [])

    def test_fail_open_passes_results_through(self):
        @fail_open(list)
        def working():
            return [1, 2]

        self.assertEqual(working(), [1, 2])

    def test_fail_open_handles_unexpected_errors(self):
        @fail_open(dict)
        def broken():
            raise KeyError('missing')

        self.assertEqual(broken(), {})


class TestVersionConsistency(unittest.TestCase):
    """Test version consistency across modules."""

    def test_version_string_format(self):
        """
        Test version string is properly formatted.

        Expects: Three numeric parts separated by dots.
        """
        parts = VERSION.split('.')
        self.assertEqual(len(parts), 3)
        for part in parts:
            self.assertTrue(part.isdigit())

    def test_version_matches_json(self):
        version_file = PROJECT_ROOT / 'version.json'
        with open(version_file, 'r', encoding='utf-8') as f:
            version_data = json.load(f)
        self.assertEqual(VERSION, version_data['version'])


class TestCodeQuality(unittest.TestCase):
    """Static code quality checks."""

    SOURCE_FILES = [
        'base_checker.py', 'compose_context.py', 'config_logging.py',
        'context_checker.py', 'formatting_checker.py', 'pause_engine.py',
        'pause_settings.py', 'spell_checker.py', 'spell_dictionary.py',
        'tone_checker.py', 'tone_lexicon.py',
        'nlp/__init__.py', 'nlp/base.py', 'nlp/config.py',
        'nlp/languagetool/__init__.py', 'nlp/languagetool/client.py',
    ]

    def test_no_bare_except(self):
        """
        Test source modules have no bare except clauses.

        Code Quality: Bare excepts catch too much, hiding bugs.
        Expects: Zero matches for '^\\s*except:\\s*$' in every module.
        """
        for name in self.SOURCE_FILES:
            with self.subTest(module=name):
                content = (PROJECT_ROOT / name).read_text(encoding='utf-8')
                bare_excepts = re.findall(r'^\s*except:\s*$', content, re.MULTILINE)
                self.assertEqual(len(bare_excepts), 0,
                                 f"Found {len(bare_excepts)} bare 'except:' clauses in {name}")

    def test_no_print_statements(self):
        """Library modules log through StructuredLogger instead of print()."""
        for name in self.SOURCE_FILES:
            with self.subTest(module=name):
                content = (PROJECT_ROOT / name).read_text(encoding='utf-8')
                self.assertIsNone(re.search(r'^\s*print\(', content, re.MULTILINE))


def run_tests():
    """Run all tests and return the result."""
    suite = unittest.defaultTestLoader.loadTestsFromModule(__import__(__name__))
    return unittest.TextTestRunner(verbosity=2).run(suite)


if __name__ == '__main__':
    import sys
    result = run_tests()
    sys.exit(0 if result.wasSuccessful() else 1)
