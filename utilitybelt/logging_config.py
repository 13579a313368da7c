"""
Logging configuration for UtilityBelt.

Every utility module gets its structlog logger from get_logger(), which keeps
the names under the "utilitybelt" hierarchy. configure_logging() only touches
that package logger, so an application embedding the toolkit keeps its own
root handlers:
- Console output (always)
- Optional file output with weekly rotation, gzip compressed, 52 weeks kept
- JSON lines, or a plain console rendering in test mode
"""
import gzip
import logging
import logging.handlers
import shutil
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import EventDict

from utilitybelt.config import get_settings, is_test_mode

PACKAGE_LOGGER = "utilitybelt"
LOG_FILE_NAME = "utilitybelt.log"


def get_log_directory(log_dir: Optional[str] = None) -> Path:
    """Get or create the log directory."""
    directory = Path(log_dir or get_settings().LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the upper-case level name ('warn' is reported as WARNING)."""
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def _get_rotated_filename(default_name: str) -> str:
    """utilitybelt.log.2025-11-28 -> utilitybelt.log.2025-11-28.gz"""
    return default_name + ".gz"


def _compress_rotated_file(source: str, dest: str) -> None:
    with open(source, 'rb') as f_in:
        with gzip.open(dest, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)

    Path(source).unlink()


def _reset_package_handlers(package_logger: logging.Logger) -> None:
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_level: Optional[str] = None,
    enable_file_logging: Optional[bool] = None,
    json_output: Optional[bool] = None
    ) -> None:
    """
    Configure structured logging for the toolkit loggers.

    Calling it again replaces the handlers set by the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to Settings.LOG_LEVEL
        enable_file_logging: Whether to enable file logging. Defaults to Settings.ENABLE_FILE_LOGGING
        json_output: Render JSON lines instead of console text. Defaults to True outside test mode
    """
    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    if enable_file_logging is None:
        enable_file_logging = settings.ENABLE_FILE_LOGGING
    if json_output is None:
        json_output = not (is_test_mode() or settings.TEST_MODE)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _reset_package_handlers(package_logger)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    formatter = logging.Formatter("%(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if enable_file_logging:
        log_file = get_log_directory(settings.LOG_DIR) / LOG_FILE_NAME

        # W0 = every Monday
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_file),
            when="W0",
            interval=1,
            backupCount=52,
            encoding="utf-8",
            utc=True
            )
        file_handler.setFormatter(formatter)
        file_handler.rotator = _compress_rotated_file
        file_handler.namer = _get_rotated_filename
        package_logger.addHandler(file_handler)

    if json_output:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
            ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger under the toolkit hierarchy.

    Names outside it are prefixed, so configure_logging() handlers see them too.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog.stdlib.BoundLogger: Configured logger

    Examples:
        logger = get_logger(__name__)           # utilitybelt.utils.number_utils
        logger = get_logger("portfolio.import")  # utilitybelt.portfolio.import
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return structlog.get_logger(name)
