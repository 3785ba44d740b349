"""
Logging configuration for anxcloud.

Provides centralized logging configuration with:
- Log level selection from the environment
- Console and rotating file handlers
- Redaction of credentials in request dumps
- Timing of API round trips
"""

from datetime import datetime
import logging
import logging.handlers
import os
from pathlib import Path
import re
import sys
from typing import Any

# -------------------- Configuration --------------------


LOG_DIR = Path.home() / ".cache" / "anxcloud" / "logs"

CONSOLE_FORMAT = "%(name)s %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REDACTED = "REDACTED"

_AUTH_HEADER_RE = re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)([^'\"\r\n,}]+)", re.I)


# -------------------- Global State --------------------


_loggers_configured = set()


# -------------------- Utility Functions --------------------


def get_log_level() -> int:
    """
    Get the current log level from environment configuration.

    Checks LOG_LEVEL environment variable first, then DEBUG flag.

    Returns:
        Logging level constant (logging.DEBUG, logging.INFO, etc.)
    """
    level_str = os.getenv("LOG_LEVEL", "").upper()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    if level_str in level_map:
        return level_map[level_str]

    if os.getenv("DEBUG", "").lower() in ("true", "1", "yes"):
        return logging.DEBUG

    return logging.INFO


def get_log_file_path() -> Path:
    """Get today's log file path, creating the log directory if needed."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    today = datetime.now().strftime("%Y-%m-%d")
    return LOG_DIR / f"anxcloud-{today}.log"


def redact(text: str) -> str:
    """Mask the value of any Authorization header found in ``text``."""
    return _AUTH_HEADER_RE.sub(rf"\g<1>{REDACTED}", text)


# -------------------- Filter Classes --------------------


class RedactingFilter(logging.Filter):
    """
    Logging filter that masks Authorization header values.

    Request dumps are logged with the header already replaced; this filter
    catches anything else (e.g. an exception message echoing headers).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


# -------------------- Setup Functions --------------------


def setup_logging(
    name: str,
    level: int | None = None,
    console: bool = True,
    file: bool = False,
) -> logging.Logger:
    """
    Setup logging for a module with consistent formatting.

    Args:
        name: Logger name (usually "anxcloud" or __name__)
        level: Log level (defaults to get_log_level())
        console: Add console handler
        file: Add rotating file handler under LOG_DIR

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("anxcloud", level=logging.DEBUG)
        >>> logger.debug("request dumps enabled")
    """
    if name in _loggers_configured:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(level or get_log_level())
    logger.handlers.clear()
    logger.propagate = False

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.addFilter(RedactingFilter())
        logger.addHandler(console_handler)

    if file:
        file_handler = logging.handlers.RotatingFileHandler(
            get_log_file_path(),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logger.level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        file_handler.addFilter(RedactingFilter())
        logger.addHandler(file_handler)

    _loggers_configured.add(name)

    return logger


# -------------------- Performance Monitoring --------------------


class PerformanceMonitor:
    """
    Context manager for timing an operation.

    Example:
        >>> with PerformanceMonitor(logger, "GET /api/LBaaS/v1/backend.json"):
        ...     response = await client.get(...)
    """

    def __init__(
        self,
        logger: logging.Logger,
        operation_name: str,
        log_level: int = logging.DEBUG,
        **metadata: Any,
    ) -> None:
        self.logger = logger
        self.operation_name = operation_name
        self.log_level = log_level
        self.metadata = metadata
        self.start_time: datetime | None = None

    def __enter__(self) -> "PerformanceMonitor":
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.start_time is None:
            return

        elapsed = (datetime.now() - self.start_time).total_seconds()
        status = "failed" if exc_type else "completed"
        msg = f"{self.operation_name} {status} in {elapsed:.2f}s"

        if self.metadata:
            metadata_str = ", ".join(f"{k}={v}" for k, v in self.metadata.items())
            msg = f"{msg} ({metadata_str})"

        self.logger.log(self.log_level, msg)
