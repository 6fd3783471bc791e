# 📄 File: plantpal/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up a logging system that records what happens in the app in a structured way,
# making it easy to follow one request through the logs and spot failed logins.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), request/user context
# carried in contextvars, performance and security event helpers.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: plantpal.main (setup), request logging middleware, auth dependencies,
# domain services for security and business events

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "plantpal-api"

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}


class ContextFilter(logging.Filter):
    """
    Adds request ID, user ID, hostname and service name to every record
    so both formatters can reference them.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.hostname = self.hostname
        record.service = SERVICE_NAME
        return True


class ContextualFormatter(logging.Formatter):
    """Plain-text formatter that appends request context when present."""

    def format(self, record: logging.LogRecord) -> str:
        record.timestamp = datetime.now(timezone.utc).isoformat()
        message = super().format(record)
        context = []
        if getattr(record, 'request_id', ''):
            context.append(f"request_id={record.request_id}")
        if getattr(record, 'user_id', ''):
            context.append(f"user_id={record.user_id}")
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            context.extend(f"{key}={value}" for key, value in extra_fields.items())
        if context:
            message = f"{message} [{' '.join(context)}]"
        return message


class StructuredJsonFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Emits one JSON object per line with a stable set of keys for
    log aggregation tools.
    """

    def __init__(self):
        super().__init__(
            "%(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = getattr(record, 'service', SERVICE_NAME)
        log_record['hostname'] = getattr(record, 'hostname', 'unknown')

        if getattr(record, 'request_id', ''):
            log_record['request_id'] = record.request_id
        if getattr(record, 'user_id', ''):
            log_record['user_id'] = record.user_id

        extra_fields = log_record.pop('extra_fields', None)
        if extra_fields:
            log_record['extra'] = extra_fields


class SecurityLogger:
    """
    Logger for security-related events and audit trails.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_authentication(
        self,
        subject: str,
        event_type: str,
        success: bool,
        ip_address: Optional[str] = None,
        extra: Optional[Dict] = None
    ):
        """Log authentication events."""
        extra_fields = {
            'event_type': 'authentication',
            'auth_event': event_type,
            'subject': subject,
            'success': success,
            **(extra or {})
        }
        if ip_address:
            extra_fields['ip_address'] = ip_address

        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"Auth {event_type} for {subject} - {'success' if success else 'failed'}",
            extra={'extra_fields': extra_fields}
        )

    def log_authorization(
        self,
        user_id: str,
        resource: str,
        action: str,
        granted: bool,
        reason: Optional[str] = None,
    ):
        """Log authorization events."""
        extra_fields = {
            'event_type': 'authorization',
            'resource': resource,
            'action': action,
            'granted': granted,
        }
        if reason:
            extra_fields['reason'] = reason

        level = logging.INFO if granted else logging.WARNING
        self.logger.log(
            level,
            f"Authorization {action} on {resource} for user {user_id} - "
            f"{'granted' if granted else 'denied'}",
            extra={'extra_fields': extra_fields}
        )


class StructuredLogger:
    """
    Logger wrapper with structured extra fields and a security sub-logger.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.security = SecurityLogger(self.logger)

    def debug(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict] = None):
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict] = None, exc_info: bool = False):
        self._log(logging.ERROR, message, extra, exc_info=exc_info)

    def _log(self, level: int, message: str, extra: Optional[Dict] = None, exc_info: bool = False):
        kwargs: Dict[str, Any] = {'exc_info': exc_info}
        if extra:
            kwargs['extra'] = {'extra_fields': extra}
        self.logger.log(level, message, **kwargs)

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        extra: Optional[Dict] = None
    ):
        """Log HTTP request performance."""
        extra_fields = {
            'event_type': 'http_request',
            'method': method,
            'path': path,
            'status_code': status_code,
            'duration_ms': round(duration_ms, 2),
            **(extra or {})
        }
        level = logging.WARNING if status_code >= 500 else logging.INFO
        self._log(level, f"HTTP {method} {path} - {status_code} - {duration_ms:.2f}ms", extra_fields)


def setup_logging(
    log_level: str = 'INFO',
    log_format: str = 'json',
    log_file: Optional[str] = None,
    enable_console: bool = True,
    force: bool = False,
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Root log level name
        log_format: 'json' or 'text'
        log_file: Optional file to log to in addition to the console
        enable_console: Whether to log to stdout
        force: Reconfigure even if logging was already set up

    Returns:
        logging.Logger: The startup logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("startup")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = StructuredJsonFormatter()
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    context_filter = ContextFilter()
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.ERROR)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = StructuredLogger(name)
    return _loggers_cache[name]


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier (generated when omitted)
        user_id: User identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')
    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user(user_id: str) -> None:
    """Attach the authenticated user to the current request's log context."""
    user_id_var.set(user_id)


def log_startup_event(service_name: str, version: str, extra: Optional[Dict] = None):
    """Log application startup event."""
    get_logger('startup').info(
        f"Service {service_name} starting up",
        extra={'event_type': 'service_startup', 'version': version, **(extra or {})}
    )


def log_shutdown_event(service_name: str):
    """Log application shutdown event."""
    get_logger('shutdown').info(
        f"Service {service_name} shutting down",
        extra={'event_type': 'service_shutdown'}
    )
