#!/usr/bin/env python3
"""
MicroPause Configuration & Logging Module
=========================================
Centralized configuration, structured logging, and error utilities.

Version: reads from version.json
"""

import os
import sys
import json
import logging
import uuid
import time
import functools
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Callable, Tuple, List
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager
import threading

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
VALID_LOG_FORMATS = ('json', 'text')
ENV_PREFIX = 'MP_'


# =============================================================================
# VERSION - Read from version.json (Single Source of Truth)
# =============================================================================
def _load_version():
    """Load version from version.json file."""
    version_file = Path(__file__).parent / 'version.json'
    try:
        with open(version_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
            return data.get('version', '1.0.0')
    except (OSError, ValueError):
        return '1.0.0'  # Fallback version

__version__ = _load_version()
VERSION = __version__
APP_NAME = "MicroPause"


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class AppConfig:
    """Application configuration for the analysis engine."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # Options: json, text
    log_to_console: bool = True
    log_to_file: bool = False
    log_dir: Path = field(default_factory=lambda: Path(__file__).parent / 'logs')

    def __post_init__(self):
        """Normalize values; unknown levels fall back to INFO."""
        self.log_level = (self.log_level or "INFO").upper()
        if self.log_level not in VALID_LOG_LEVELS:
            self.log_level = "INFO"
        self.log_format = (self.log_format or "json").lower()
        self.log_dir = Path(self.log_dir)

        # Only touch the filesystem when file logging is requested
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load configuration from environment variables."""
        defaults = cls.__dataclass_fields__
        log_dir = os.environ.get(ENV_PREFIX + 'LOG_DIR')
        return cls(
            log_level=os.environ.get(ENV_PREFIX + 'LOG_LEVEL', 'INFO'),
            log_format=os.environ.get(ENV_PREFIX + 'LOG_FORMAT', 'json'),
            log_to_console=_env_flag('LOG_TO_CONSOLE', defaults['log_to_console'].default),
            log_to_file=_env_flag('LOG_TO_FILE', defaults['log_to_file'].default),
            log_dir=Path(log_dir) if log_dir else Path(__file__).parent / 'logs',
        )

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if self.log_format not in VALID_LOG_FORMATS:
            errors.append(f"Invalid log_format: {self.log_format}. Must be 'json' or 'text'")

        if not self.log_to_console and not self.log_to_file:
            errors.append("At least one of log_to_console or log_to_file must be enabled")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured JSON logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[AppConfig] = None):
        self.name = name
        self.config = config or get_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(f"{APP_NAME.lower()}.{self.name}")
        self.logger.setLevel(getattr(logging, self.config.log_level))
        self.logger.handlers.clear()
        self.logger.propagate = False

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler with rotation (prevents disk fill)
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _build_log_record(self, level: str, message: str, **kwargs) -> Dict[str, Any]:
        """Build a structured log record."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': level,
            'logger': self.name,
            'correlation_id': self.get_correlation_id(),
            'message': message,
            **kwargs
        }

    def _emit(self, level: int, level_name: str, message: str, exc_info: bool = False, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        if self.config.log_format == 'json':
            record = self._build_log_record(level_name, message, **kwargs)
            if exc_info:
                import traceback
                record['traceback'] = traceback.format_exc()
            self.logger.log(level, json.dumps(record, default=str))
        else:
            self.logger.log(level, message, exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._emit(logging.DEBUG, 'DEBUG', message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._emit(logging.INFO, 'INFO', message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._emit(logging.WARNING, 'WARNING', message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self._emit(logging.ERROR, 'ERROR', message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        # StructuredLogger already serialized the record
        if message.startswith('{'):
            return message

        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': message,
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


# Factory function for getting loggers
def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, get_config())


# =============================================================================
# ERROR HANDLING UTILITIES
# =============================================================================

class MicroPauseError(Exception):
    """Base exception for MicroPause."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable error payload."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ConfigurationError(MicroPauseError):
    """Invalid configuration value."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="CONFIG_ERROR", details={'field': field, **kwargs})


class GrammarServiceError(MicroPauseError):
    """The external grammar service failed or returned an unusable response."""
    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, code="GRAMMAR_SERVICE_ERROR",
                         details={'status_code': status_code, **kwargs})
        self.status_code = status_code


def fail_open(default_factory: Callable[[], Any], logger: Optional[StructuredLogger] = None):
    """
    Decorator that turns any exception into a logged default value.

    Used at the boundary with external services, where a failure must
    degrade to "no finding" instead of failing the caller.
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except MicroPauseError as e:
                _logger = logger or get_logger(func.__module__)
                _logger.warning(f"{func.__name__} degraded: {e.message}", code=e.code, **e.details)
            except Exception as e:
                _logger = logger or get_logger(func.__module__)
                _logger.warning(f"{func.__name__} degraded: {type(e).__name__}: {e}")
            return default_factory()
        return wrapper
    return decorator
