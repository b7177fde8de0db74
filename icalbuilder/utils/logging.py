"""Logging setup for applications embedding icalbuilder.

The library itself only creates module loggers; nothing here runs on import
apart from registering the VERBOSE level.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from ..config.settings import IcalBuilderSettings

LOGGER_NAMESPACE = "icalbuilder"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s.%(funcName)s:%(lineno)d %(message)s"
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUP_COUNT = 5

# Sits between DEBUG (10) and INFO (20)
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")


def _log_verbose(self: logging.Logger, message: Any, *args: Any, **kwargs: Any) -> None:
    """``logger.verbose(...)``: per-component detail that is too chatty for INFO."""
    if self.isEnabledFor(VERBOSE):
        self._log(VERBOSE, message, args, **kwargs)


logging.Logger.verbose = _log_verbose  # type: ignore[attr-defined]


def get_log_level(level_name: str) -> int:
    """Translate a level name (any case, VERBOSE included) to its number.

    Raises:
        ValueError: If the name is not a registered level.
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name!r}")
    return level


def detect_color_mode(stream: Optional[IO[str]] = None) -> str:
    """Return ``"truecolor"``, ``"basic"`` or ``"none"`` for the given stream."""
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return "none"

    term = os.environ.get("TERM", "").lower()
    if term == "dumb":
        return "none"
    if os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit") or "256color" in term:
        return "truecolor"
    return "basic" if "color" in term else "none"


class AutoColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when the terminal allows it."""

    # level -> (basic ANSI, bright ANSI)
    LEVEL_COLORS = {
        "DEBUG": ("\033[35m", "\033[95m"),
        "VERBOSE": ("\033[32m", "\033[92m"),
        "INFO": ("\033[34m", "\033[94m"),
        "WARNING": ("\033[33m", "\033[93m"),
        "ERROR": ("\033[31m", "\033[91m"),
        "CRITICAL": ("\033[31m\033[1m", "\033[91m\033[1m"),
    }
    RESET = "\033[0m"

    def __init__(self, *args: Any, enable_colors: bool = True, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.color_mode = detect_color_mode() if enable_colors else "none"

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        colors = self.LEVEL_COLORS.get(record.levelname)
        if self.color_mode == "none" or colors is None:
            return text

        color = colors[1] if self.color_mode == "truecolor" else colors[0]
        return text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def _console_handler(level: int, enable_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        AutoColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S", enable_colors=enable_colors)
    )
    return handler


def _file_handler(path: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUP_COUNT, encoding="utf-8"
    )
    # the file keeps everything the package logger lets through
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    enable_colors: bool = True,
) -> logging.Logger:
    """Attach console (and optionally rotating file) output to the package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_level: DEBUG, VERBOSE, INFO, WARNING, ERROR or CRITICAL. Unknown
            names fall back to WARNING.
        log_file: File name for a rotating log, created under ``log_dir``
            when one is given.
        log_dir: Directory for ``log_file``; created if missing.
        enable_colors: Color level names on capable terminals.

    Returns:
        The ``icalbuilder`` logger.
    """
    try:
        level = get_log_level(log_level)
    except ValueError:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(level, enable_colors))

    if log_file:
        path = Path(log_file)
        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            path = Path(log_dir) / log_file
        logger.addHandler(_file_handler(path))
        logger.info("Logging to file: %s", path)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger


def setup_logging_from_settings(settings: "IcalBuilderSettings") -> logging.Logger:
    """Configure logging from an ``IcalBuilderSettings`` instance."""
    return setup_logging(log_level=settings.log_level, log_file=settings.log_file)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``icalbuilder`` namespace.

    >>> get_logger("export").name
    'icalbuilder.export'
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
