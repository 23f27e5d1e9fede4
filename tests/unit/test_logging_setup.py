"""Unit tests for logging setup."""

import logging

from rigid import Rigid
from rigid.logging_setup import (
    ContextFormatter,
    get_logger,
    is_logging_initialized,
    setup_logging,
)


class TestLoggingSetup:
    """Tests for logging setup functionality."""

    def test_get_logger_namespace(self):
        assert get_logger("core").name == "rigid.core"

    def test_library_is_silent_by_default(self):
        """Test that importing rigid configures no output handlers."""
        assert not is_logging_initialized()
        handlers = logging.getLogger("rigid").handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)

    def test_setup_logging_with_file(self, tmp_path):
        logger = setup_logging(file_level="DEBUG", log_dir=tmp_path, console=False)

        assert logger.name == "rigid"
        assert is_logging_initialized()

        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1
        # Filename should match pattern: YYYYMMDD_HHMMSS-PID.log
        assert "-" in log_files[0].stem

    def test_setup_logging_only_once(self, tmp_path):
        first = setup_logging(log_dir=tmp_path, console=False)
        second = setup_logging(log_dir=tmp_path, console=False)

        assert first is second
        assert len(list(tmp_path.glob("*.log"))) == 1

    def test_secret_key_never_logged(self, tmp_path, secret_key):
        setup_logging(file_level="DEBUG", log_dir=tmp_path, console=False)

        rigid = Rigid(secret_key)
        rigid.generate("meta", "ignored")

        for handler in logging.getLogger("rigid").handlers:
            handler.flush()
        content = next(tmp_path.glob("*.log")).read_text(encoding="utf-8")

        assert "signature_length=8" in content
        assert "Ignoring 1 extra metadata value(s)" in content
        assert secret_key.decode() not in content


class TestContextFormatter:
    """Tests for the context formatter."""

    def _record(self, name):
        return logging.LogRecord(name, logging.INFO, __file__, 1, "hello", None, None)

    def test_component_from_logger_name(self):
        output = ContextFormatter().format(self._record("rigid.core"))
        assert "[core]" in output
        assert "INFO - hello" in output

    def test_component_for_foreign_logger(self):
        output = ContextFormatter().format(self._record("other"))
        assert "[system]" in output

    def test_utc_timestamp(self):
        output = ContextFormatter().format(self._record("rigid.cli"))
        # datefmt renders e.g. 2024-01-01T12:00:00.123
        assert output[4] == "-" and output[10] == "T"
