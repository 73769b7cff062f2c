"""
Centralized logging for scratchcore.
Colored console output, optional rotating file output and a JSON formatter
that carries the structured context attached to diagnostics.
"""

import logging
import sys
import json
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


# ANSI color codes for console output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_RECORD_FIELDS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict:
    return {
        k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS
    }


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colored output for console."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GRAY,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.MAGENTA,
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        level = f"{color}{record.levelname:<8}{Colors.RESET}"
        name = f"{Colors.CYAN}{record.name}{Colors.RESET}"
        message = record.getMessage()

        code = getattr(record, "code", None)
        if code:
            message = f"{Colors.BLUE}[{code}]{Colors.RESET} {message}"

        return f"{Colors.GRAY}{timestamp}{Colors.RESET} | {level} | {name} | {message}"


class PlainFormatter(logging.Formatter):
    """Plain formatter for file output (no colors)."""

    def format(self, record):
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        code = getattr(record, "code", None)
        prefix = f"[{code}] " if code else ""
        return f"{timestamp} | {record.levelname:<8} | {record.name} | {prefix}{record.getMessage()}"


class JsonFormatter(logging.Formatter):
    """Formatter for structured logging in JSON format."""

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = _extra_fields(record)
        context = extra_fields.pop("context", None)
        if extra_fields:
            log_record.update(extra_fields)
        if isinstance(context, dict):
            # Diagnostic context is flattened but never replaces a record field
            for key, value in context.items():
                log_record.setdefault(key, value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


def setup_logger(
    name: str = "scratchcore",
    level: str = "INFO",
    log_to_file: bool = False,
    log_file_path: Optional[Path] = None,
    max_file_size: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
    formatter: str = "color",
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to also log to a file
        log_file_path: Path for log file (defaults to data/scratchcore.log)
        max_file_size: Max size of log file before rotation
        backup_count: Number of backup files to keep
        formatter: "color" or "json" for the console handler

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Don't add handlers if already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console_handler = logging.StreamHandler(sys.stdout)
    if formatter == "json":
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter())
    logger.addHandler(console_handler)

    if log_to_file:
        try:
            if log_file_path is None:
                log_file_path = Path(__file__).parent.parent.parent / "data" / "scratchcore.log"

            log_file_path.parent.mkdir(exist_ok=True)

            file_handler = RotatingFileHandler(
                log_file_path, maxBytes=max_file_size, backupCount=backup_count
            )
            file_handler.setFormatter(PlainFormatter())
            logger.addHandler(file_handler)
        except (OSError, PermissionError) as e:
            # Console logging keeps working without the file handler
            sys.stderr.write(f"WARNING: Could not set up file logging: {e}\n")

    logger.propagate = False

    return logger


_app_logger: Optional[logging.Logger] = None


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance. If name is provided, returns a child logger.

    Args:
        name: Optional sub-logger name (e.g., "prize_pool", "catalog")
    """
    global _app_logger

    if _app_logger is None:
        _app_logger = setup_logger()

    if name:
        return _app_logger.getChild(name)
    return _app_logger


def init_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    formatter: str = "color",
    log_file_path: Optional[Path] = None,
):
    """
    Initialize the logging system from configuration.
    Should be called once by the embedding application.
    """
    global _app_logger
    _app_logger = setup_logger(
        level=level,
        log_to_file=log_to_file,
        log_file_path=log_file_path,
        formatter=formatter,
    )
    _app_logger.info(f"Logging initialized at {level} level")
