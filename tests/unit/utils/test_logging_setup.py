"""Tests for icalbuilder.utils.logging."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from icalbuilder.config import IcalBuilderSettings
from icalbuilder.utils.logging import (
    LOGGER_NAMESPACE,
    VERBOSE,
    AutoColoredFormatter,
    detect_color_mode,
    get_log_level,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


@pytest.fixture(autouse=True)
def restore_package_logger() -> Generator[None, None, None]:
    """Detach handlers added by setup_logging after each test."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


class TestVerboseLevel:
    """Test the VERBOSE custom level."""

    def test_verbose_level_when_registered_then_between_debug_and_info(self) -> None:
        assert VERBOSE == 15
        assert logging.getLevelName(VERBOSE) == "VERBOSE"

    def test_verbose_method_when_enabled_then_logs(self) -> None:
        logger = logging.getLogger("icalbuilder.test_verbose")
        logger.setLevel(VERBOSE)
        with patch.object(logger, "_log") as mock_log:
            logger.verbose("rendered %d events", 3)  # type: ignore[attr-defined]
        mock_log.assert_called_once_with(VERBOSE, "rendered %d events", (3,))

    def test_verbose_method_when_level_higher_then_skipped(self) -> None:
        logger = logging.getLogger("icalbuilder.test_verbose_skip")
        logger.setLevel(logging.INFO)
        with patch.object(logger, "_log") as mock_log:
            logger.verbose("hidden")  # type: ignore[attr-defined]
        mock_log.assert_not_called()


class TestGetLogLevel:
    """Test level name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("debug", logging.DEBUG), ("VERBOSE", VERBOSE), ("Warning", logging.WARNING)],
    )
    def test_get_log_level_when_known_then_number(self, name: str, expected: int) -> None:
        assert get_log_level(name) == expected

    def test_get_log_level_when_unknown_then_value_error(self) -> None:
        with pytest.raises(ValueError, match="LOUD"):
            get_log_level("LOUD")


class TestAutoColoredFormatter:
    """Test color detection."""

    def test_format_when_colors_disabled_then_plain(self) -> None:
        formatter = AutoColoredFormatter("%(levelname)s %(message)s", enable_colors=False)
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        assert formatter.format(record) == "ERROR boom"

    def test_detect_color_support_when_not_tty_then_none(self) -> None:
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = False
            assert AutoColoredFormatter(enable_colors=True).color_mode == "none"

    @pytest.mark.parametrize(
        ("term", "colorterm", "expected"),
        [
            ("dumb", "truecolor", "none"),
            ("xterm", "24bit", "truecolor"),
            ("xterm-color", "", "basic"),
            ("vt100", "", "none"),
        ],
    )
    def test_detect_color_mode_when_tty_then_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, term: str, colorterm: str, expected: str
    ) -> None:
        monkeypatch.setenv("TERM", term)
        monkeypatch.setenv("COLORTERM", colorterm)
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = True
            assert detect_color_mode(stderr) == expected

    def test_format_when_basic_then_level_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "xterm-color")
        monkeypatch.delenv("COLORTERM", raising=False)
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = True
            formatter = AutoColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("x", VERBOSE, __file__, 1, "detail", None, None)
        assert formatter.format(record) == "\033[32mVERBOSE\033[0m detail"

    def test_format_when_truecolor_then_level_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "xterm-256color")
        with patch("sys.stderr") as stderr:
            stderr.isatty.return_value = True
            formatter = AutoColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        assert formatter.format(record) == "\033[93mWARNING\033[0m careful"


class TestSetupLogging:
    """Test logger configuration."""

    def test_setup_logging_when_level_then_package_logger_configured(self) -> None:
        logger = setup_logging("debug", enable_colors=False)
        assert logger.name == LOGGER_NAMESPACE
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_logging_when_unknown_level_then_warning(self) -> None:
        assert setup_logging("LOUD").level == logging.WARNING

    def test_setup_logging_when_called_twice_then_handlers_replaced(self) -> None:
        setup_logging("INFO")
        logger = setup_logging("INFO")
        assert len(logger.handlers) == 1

    def test_setup_logging_when_log_file_then_rotating_handler(self, tmp_path: Path) -> None:
        logger = setup_logging("INFO", log_file="icalbuilder.log", log_dir=tmp_path / "logs")
        handler_types = {type(handler).__name__ for handler in logger.handlers}
        assert "RotatingFileHandler" in handler_types

        logging.getLogger("icalbuilder.ics.calendar").info("hello file")
        for handler in logger.handlers:
            handler.flush()
        assert "hello file" in (tmp_path / "logs" / "icalbuilder.log").read_text(encoding="utf-8")

    def test_setup_logging_from_settings_when_called_then_settings_level(self) -> None:
        logger = setup_logging_from_settings(IcalBuilderSettings(log_level="error"))
        assert logger.level == logging.ERROR


class TestGetLogger:
    """Test namespaced loggers."""

    def test_get_logger_when_short_name_then_namespaced(self) -> None:
        assert get_logger("export").name == "icalbuilder.export"

    def test_get_logger_when_already_namespaced_then_unchanged(self) -> None:
        assert get_logger("icalbuilder.ics").name == "icalbuilder.ics"
