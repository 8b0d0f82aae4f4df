"""
Logging Configuration and Utilities

Structured logging for the engine with structlog, a JSON formatter from
python-json-logger and a context-aware logger adapter.
"""

import sys
import logging
import logging.handlers
from typing import Iterator, Optional
from datetime import datetime, timezone
from pathlib import Path
from contextlib import contextmanager
from contextvars import ContextVar

import structlog
from pythonjsonlogger import jsonlogger

from staffleave.config.settings import settings

# Acting user for the current operation
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)


class ActorContextProcessor:
    """Add the acting user and service context to log records"""

    def __call__(self, logger, method_name, event_dict):
        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'staff-leave'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class SignatureRedactionProcessor:
    """Keep signature images out of log output"""

    def __call__(self, logger, method_name, event_dict):
        for key in list(event_dict.keys()):
            if 'signature_url' in key.lower() or 'password' in key.lower():
                event_dict[key] = '[REDACTED]'
        return event_dict


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Configure structured logging with structlog"""

        processors = [
            ActorContextProcessor(),
            SignatureRedactionProcessor(),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if settings.logging.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure the package logger"""

        level = getattr(logging, settings.logging.LOG_LEVEL)
        package_logger = logging.getLogger("staffleave")
        package_logger.setLevel(level)
        package_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if settings.logging.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        console_handler.setFormatter(formatter)
        package_logger.addHandler(console_handler)

        if settings.logging.LOG_FILE:
            log_path = Path(settings.logging.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            if settings.logging.LOG_ROTATION == "size":
                file_handler = logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=10*1024*1024,  # 10MB
                    backupCount=5
                )
            else:
                file_handler = logging.handlers.TimedRotatingFileHandler(
                    log_path,
                    when='midnight',
                    interval=1,
                    backupCount=settings.logging.LOG_RETENTION
                )

            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)


class LoggerAdapter:
    """Logger adapter with bindable context"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context = {}

    def add_context(self, **kwargs):
        """Add context to all log messages"""
        self._context.update(kwargs)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        kwargs['extra'] = {**kwargs.get('extra', {}), **self._context}

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or "staffleave"))


@contextmanager
def bound_user(uid: Optional[str]) -> Iterator[None]:
    """Attach `uid` to structured log records emitted inside the block"""
    token = user_id.set(uid)
    try:
        yield
    finally:
        user_id.reset(token)


def get_audit_logger():
    """Structured logger for request state changes"""
    return structlog.get_logger("staffleave.audit")


def setup_logging():
    """Initialize logging configuration"""
    if settings.logging.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()

    LoggingConfig.configure_standard_logging()

    logger = get_logger(__name__)
    logger.debug("Logging system initialized", extra={
        'log_level': settings.logging.LOG_LEVEL,
        'log_format': settings.logging.LOG_FORMAT,
        'structured_logging': settings.logging.ENABLE_STRUCTURED_LOGGING
    })


# Initialize logging when module is imported
setup_logging()

__all__ = [
    'get_logger',
    'get_audit_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'bound_user',
    'user_id',
]
