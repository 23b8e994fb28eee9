# tests/test_logger.py - Tests for logging setup
"""
Unit tests for setup_logging and the colored console formatter.
"""

import io
import logging

import pytest
from click.testing import CliRunner
from colorama import Fore
from txblocked.cli import cli
from txblocked.utils.logger import LevelColorFormatter, setup_logging


@pytest.fixture
def root_logger():
    """Restore the root logger's handlers and level after a test"""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    yield root

    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def console_handlers(root, stream):
    return [h for h in root.handlers if getattr(h, 'stream', None) is stream]


class TestSetupLogging:
    """Test cases for setup_logging"""

    def test_plain_console(self, root_logger):
        """Test plain console lines when colors are off"""
        stream = io.StringIO()
        setup_logging('INFO', use_colors=False, stream=stream)

        logging.getLogger('txblocked.analyzer').warning("3 degenerate connections")

        assert stream.getvalue() == "WARNING txblocked.analyzer: 3 degenerate connections\n"

    def test_level_filters_console(self, root_logger):
        """Test records below the configured level are dropped"""
        stream = io.StringIO()
        setup_logging('ERROR', use_colors=False, stream=stream)

        logging.getLogger('txblocked').info("loaded")

        assert stream.getvalue() == ""
        assert root_logger.level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self, root_logger):
        """Test an unknown level name means INFO"""
        setup_logging('chatty', use_colors=False, stream=io.StringIO())

        assert root_logger.level == logging.INFO

    def test_colors_follow_terminal(self, root_logger):
        """Test colors are only chosen automatically for terminals"""
        stream = io.StringIO()
        setup_logging('INFO', stream=stream)

        handler, = console_handlers(root_logger, stream)
        assert not isinstance(handler.formatter, LevelColorFormatter)

    def test_colored_console_plain_file(self, root_logger, tmp_path):
        """Test the file handler keeps the plain level name"""
        stream = io.StringIO()
        log_file = tmp_path / "txblocked.log"
        setup_logging('INFO', log_file=str(log_file), use_colors=True, stream=stream)

        logging.getLogger('txblocked.cli').error("cannot build table")

        assert f"{Fore.RED}ERROR" in stream.getvalue()
        text = log_file.read_text()
        assert "ERROR    txblocked.cli: cannot build table" in text
        assert "\x1b[" not in text

    def test_repeated_setup_replaces_own_handlers(self, root_logger):
        """Test a second call swaps handlers instead of duplicating them"""
        foreign = logging.NullHandler()
        root_logger.addHandler(foreign)
        first, second = io.StringIO(), io.StringIO()

        setup_logging('INFO', use_colors=False, stream=first)
        setup_logging('INFO', use_colors=False, stream=second)
        logging.getLogger('txblocked').warning("once")

        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1
        assert foreign in root_logger.handlers


class TestCliLogging:
    """Test cases for logging options on the command line"""

    def test_log_file_option(self, root_logger, snapshot_file, tmp_path):
        """Test --log-file receives the analyzer's records"""
        log_file = tmp_path / "run.log"

        result = CliRunner().invoke(cli, [
            '--log-level', 'INFO', '--log-file', str(log_file), '--no-color',
            'analyze', str(snapshot_file), '--format', 'csv'
        ])

        assert result.exit_code == 0, result.output
        assert "Loaded 2 connections" in log_file.read_text()
