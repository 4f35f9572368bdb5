"""
Structured JSON Logging Configuration

Provides centralized logging configuration with:
- JSON formatted output for machine parsing
- Correlation ID tracking via contextvars
- Optional file rotation when a log directory is configured
"""
import contextvars
import logging
import logging.handlers
import os
import re
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

from applepush.core.config import settings

# Context variable for correlating logs of one notification batch
correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that adds correlation_id to all log records.

    Lets callers tag every log line emitted while building and sending
    one batch of notifications.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        return True


class SanitizingFilter(logging.Filter):
    """
    Filter that strips line breaks from log messages.

    Alert text and custom properties are caller-controlled and may
    contain newlines that would forge extra log entries.
    """

    DANGEROUS_PATTERNS = [
        (r'\r\n', ' '),
        (r'\n', ' '),
        (r'\r', ' '),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _strip_line_breaks(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                _strip_line_breaks(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        return True


def _strip_line_breaks(value: str) -> str:
    for pattern, replacement in SanitizingFilter.DANGEROUS_PATTERNS:
        value = re.sub(pattern, replacement, value)
    return value


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds standard fields to all log entries.

    Output format:
    {
        "timestamp": "2026-01-01T10:30:00.000000+00:00",
        "level": "DEBUG",
        "message": "Built APNS request",
        "module": "request",
        "logger": "applepush.services.push.request",
        "correlation_id": "batch-42",
        ...extra fields...
    }
    """

    def add_fields(
        self,
        log_record: dict,
        record: logging.LogRecord,
        message_dict: dict
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.now(timezone.utc).isoformat()

        log_record['level'] = record.levelname
        log_record['module'] = record.module
        log_record['logger'] = record.name
        log_record['correlation_id'] = getattr(record, 'correlation_id', '-')

        if record.funcName:
            log_record['function'] = record.funcName
        if record.lineno:
            log_record['line'] = record.lineno

        if 'message' not in log_record:
            log_record['message'] = record.getMessage()


def _configure_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    handler.addFilter(SanitizingFilter())


def setup_logging(
    log_level: Optional[str] = None,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Configure application-wide JSON logging.

    Args:
        log_level: Override log level (default from settings.LOG_LEVEL)
        log_dir: Directory for rotating log files (default settings.LOG_DIR).
            Only console logging is configured when neither is set.

    Returns:
        Root logger configured for the application
    """
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)
    directory = log_dir or settings.LOG_DIR

    json_formatter = CustomJsonFormatter(
        '%(timestamp)s %(level)s %(name)s %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    _configure_handler(console_handler, level, json_formatter)
    root_logger.addHandler(console_handler)

    if directory:
        os.makedirs(directory, exist_ok=True)

        # Max 10MB per file, keep 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(directory, 'applepush.log'),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        _configure_handler(file_handler, level, json_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            os.path.join(directory, 'error.log'),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        _configure_handler(error_handler, logging.ERROR, json_formatter)
        root_logger.addHandler(error_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the application's configuration.

    Args:
        name: Logger name (typically __name__ from the calling module)
    """
    return logging.getLogger(name)


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """
    Set the correlation ID for the current context.

    Returns:
        Token that can be used to reset the context
    """
    return correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID, or None if not set."""
    return correlation_id_var.get()


def clear_correlation_id(token: contextvars.Token) -> None:
    """Reset the correlation ID using the token from set_correlation_id."""
    correlation_id_var.reset(token)


def sanitize_log_value(value: str) -> str:
    """
    Sanitize a value for safe logging, preventing log injection.

    Args:
        value: Value to sanitize; non-strings are converted with str()

    Returns:
        Sanitized string safe for logging
    """
    if not isinstance(value, str):
        return str(value)

    sanitized = value.replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')

    max_length = 10000
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + '...[truncated]'

    return sanitized
