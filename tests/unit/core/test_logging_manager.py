"""
Tests for logging_manager module.

Tests JournalLogger file output and the safe_logger/NullLogger pair
that lets managers run without a logger.
"""
import pytest
from unittest.mock import MagicMock

import click

from daybook.core.exceptions import NotFoundError
from daybook.core.logging_manager import (
    JournalLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """NullLogger logging methods should do nothing."""
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"})
        logger.log_error(ValueError("boom"), {"context": "test"})
        logger.log_debug("debug")
        logger.log_info("info")
        logger.log_warning("warning")

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        message = NullLogger().log_cli_error(NotFoundError("Entry not found: abc"))
        assert message == "✗ NotFoundError: Entry not found: abc"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_null_logger_for_none(self):
        """safe_logger(None) should return a NullLogger."""
        assert isinstance(safe_logger(None), NullLogger)

    def test_returns_same_logger(self):
        """safe_logger should pass through a real logger."""
        logger = MagicMock(spec=JournalLogger)
        assert safe_logger(logger) is logger


class TestJournalLogger:
    """Tests for JournalLogger file output."""

    def test_creates_log_files(self, tmp_dir):
        """Operations go to <component>.log, errors to errors.log."""
        logger = JournalLogger(tmp_dir, component_name="unit")
        logger.log_operation("create_entry", {"entry_id": "abc"})
        try:
            raise ValueError("broken")
        except ValueError as e:
            logger.log_error(e, {"operation": "create_entry"})

        operations = (tmp_dir / "unit.log").read_text()
        errors = (tmp_dir / "errors.log").read_text()
        assert "OPERATION - create_entry" in operations
        assert '"entry_id": "abc"' in operations
        assert "ValueError: broken" in errors
        assert "operation=create_entry" in errors

    def test_log_cli_error_with_traceback(self, tmp_dir):
        """show_traceback appends the traceback to the message."""
        logger = JournalLogger(tmp_dir, component_name="cli")
        try:
            raise NotFoundError("Tag not found: x")
        except NotFoundError as e:
            message = logger.log_cli_error(e, show_traceback=True)

        assert message.startswith("✗ NotFoundError: Tag not found: x")
        assert "Traceback" in message


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code(self):
        """handle_cli_error should exit with the given code."""
        ctx = click.Context(click.Command("test"), obj={"verbose": False})
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("gone"), "test_op", exit_code=2)
        assert exc_info.value.code == 2

    def test_logs_with_context(self):
        """handle_cli_error should log through the context logger."""
        logger = MagicMock(spec=JournalLogger)
        logger.log_cli_error.return_value = "✗ NotFoundError: gone"
        ctx = click.Context(click.Command("test"), obj={"logger": logger})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, NotFoundError("gone"), "entry_show", {"entry_id": "1"})

        context = logger.log_cli_error.call_args[0][1]
        assert context == {"operation": "entry_show", "entry_id": "1"}
