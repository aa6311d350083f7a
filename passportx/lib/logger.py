import logging
import os
from typing import Any, List, Optional

# Map string log levels to logging constants
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord carries; anything else was passed via `extra`
RESERVED_RECORD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    ]
)

# Short aliases for common extra keys
EXTRA_ALIASES = {
    "event_type": "type",
    "handler_name": "handler",
    "transaction_hash": "tx",
    "block_height": "block",
}


def _format_extra(key: str, value: Any) -> Optional[str]:
    if key == "dispatch" and isinstance(value, dict):
        parts = []
        if "success" in value:
            parts.append(f"success={value['success']}")
        if "processing_time_ms" in value:
            parts.append(f"time={value['processing_time_ms']}ms")
        return " ".join(parts) or None
    if isinstance(value, (dict, list)):
        return f"{key}={str(value)[:100]}"
    return f"{EXTRA_ALIASES.get(key, key)}={value}"


class StructuredFormatter(logging.Formatter):
    """Human-readable single line formatter that appends `extra` fields as key=value pairs."""

    def format(self, record):
        timestamp = self.formatTime(record, self.datefmt or "%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        logger_name = record.name.split(".")[-1][:24].ljust(24)
        log_line = f"{timestamp} | {level} | {logger_name} | {record.getMessage()}"

        extras: List[str] = []
        for key, value in record.__dict__.items():
            if key in RESERVED_RECORD_ATTRS or value is None:
                continue
            formatted = _format_extra(key, value)
            if formatted:
                extras.append(formatted)

        if extras:
            log_line += f" | {' '.join(extras)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


def get_log_level() -> int:
    """Resolve the log level from LOG_LEVEL, falling back to INFO."""
    return LOG_LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def configure_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance with consistent formatting and level.

    Args:
        name (Optional[str]): Logger name. Defaults to the "passportx" logger

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name if name else "passportx")

    log_level = get_log_level()
    logger.setLevel(log_level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(StructuredFormatter())
        logger.addHandler(console_handler)

    return logger


def setup_uvicorn_logging():
    """Apply the structured formatter to uvicorn, fastapi and root handlers."""
    # Request logging is left to the application loggers
    logging.getLogger("uvicorn.access").disabled = True

    structured_formatter = StructuredFormatter()
    for logger_name in ["uvicorn", "uvicorn.error", "fastapi", None]:
        for handler in logging.getLogger(logger_name).handlers:
            handler.setFormatter(structured_formatter)
