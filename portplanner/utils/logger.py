"""Logging system with performance monitoring and structured logging."""

import logging
import logging.handlers
import sys
import json
import time
import functools
from pathlib import Path
from typing import Dict, Any, Optional
from contextvars import ContextVar

from portplanner.utils.config import LoggingConfig
from portplanner.utils.constants import SLOW_OPERATION_SECONDS

# Context variable for per-run tracking
run_context: ContextVar[Dict[str, Any]] = ContextVar('run_context', default={})

_RESERVED_RECORD_KEYS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname', 'levelno',
    'lineno', 'module', 'msecs', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info', 'taskName', 'message',
))


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        context = run_context.get({})

        log_data = {
            'timestamp': record.created,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add context information
        if context:
            log_data.update(context)

        # Add exception information
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class PerformanceFormatter(logging.Formatter):
    """Formatter that includes run context and timing."""

    def format(self, record: logging.LogRecord) -> str:
        """Format with performance information."""
        context = run_context.get({})

        message = super().format(record)

        perf_info = []
        if 'execution_time' in context:
            perf_info.append(f"exec_time={context['execution_time']:.3f}s")
        if 'strategy' in context:
            perf_info.append(f"strategy={context['strategy']}")
        if 'run_id' in context:
            perf_info.append(f"run_id={str(context['run_id'])[:8]}")

        if perf_info:
            message += f" [{', '.join(perf_info)}]"

        return message


class LoggerManager:
    """Centralized logger management with log statistics."""

    def __init__(self, config: LoggingConfig):
        """Initialize logger manager."""
        self.config = config
        self.loggers: Dict[str, logging.Logger] = {}
        self.handlers: Dict[str, logging.Handler] = {}
        self.performance_stats = {
            'total_logs': 0,
            'error_logs': 0,
            'warning_logs': 0,
            'start_time': time.time()
        }

        self._setup_package_logger()

    def _setup_package_logger(self):
        """Setup the package logger configuration."""
        level = getattr(logging, self.config.level.upper())
        package_logger = logging.getLogger('portplanner')
        package_logger.setLevel(level)

        # Replace handlers installed by a previous manager
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        # Console handler on stderr, stdout carries the plan
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if self.config.level.upper() == 'DEBUG':
            console_formatter = PerformanceFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
        else:
            console_formatter = logging.Formatter(self.config.format)

        console_handler.setFormatter(console_formatter)
        package_logger.addHandler(console_handler)
        self.handlers['console'] = console_handler

        if self.config.file_enabled:
            self._setup_file_handler(package_logger, level)

        self._setup_stats_handler(package_logger)

    def _setup_file_handler(self, package_logger: logging.Logger, level: int):
        """Setup rotating file handler."""
        logs_dir = Path(self.config.file_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "portplanner.log",
            maxBytes=self.config.file_max_size,
            backupCount=self.config.file_backup_count
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(StructuredFormatter())

        package_logger.addHandler(file_handler)
        self.handlers['file'] = file_handler

    def _setup_stats_handler(self, package_logger: logging.Logger):
        """Setup handler counting emitted records."""

        class StatsHandler(logging.Handler):
            def __init__(self, stats_dict):
                super().__init__()
                self.stats = stats_dict

            def emit(self, record):
                self.stats['total_logs'] += 1
                if record.levelno >= logging.ERROR:
                    self.stats['error_logs'] += 1
                elif record.levelno >= logging.WARNING:
                    self.stats['warning_logs'] += 1

        stats_handler = StatsHandler(self.performance_stats)
        package_logger.addHandler(stats_handler)
        self.handlers['stats'] = stats_handler

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get logger instance."""
        if name is None:
            return logging.getLogger('portplanner')

        if name not in self.loggers:
            self.loggers[name] = logging.getLogger(name)

        return self.loggers[name]

    def get_stats(self) -> Dict[str, Any]:
        """Get logging statistics."""
        uptime = time.time() - self.performance_stats['start_time']
        total_logs = self.performance_stats['total_logs']

        return {
            **self.performance_stats,
            'uptime_seconds': uptime,
            'logs_per_second': total_logs / uptime if uptime > 0 else 0,
            'error_rate': (self.performance_stats['error_logs'] / total_logs
                           if total_logs > 0 else 0)
        }


class ContextManager:
    """Context manager for logging context."""

    def __init__(self, **context):
        self.context = context
        self.previous_context = None

    def __enter__(self):
        self.previous_context = run_context.get({})
        new_context = self.previous_context.copy()
        new_context.update(self.context)
        run_context.set(new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        run_context.set(self.previous_context or {})


def performance_timer(func_name: Optional[str] = None):
    """Decorator for performance timing."""
    def decorator(func):
        name = func_name or f"{func.__module__}.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                execution_time = time.perf_counter() - start_time
                context = run_context.get({}).copy()
                context['execution_time'] = execution_time
                run_context.set(context)

                if execution_time > SLOW_OPERATION_SECONDS:
                    logging.getLogger(name).warning(
                        f"Slow operation: {name} took {execution_time:.3f}s"
                    )

        return wrapper

    return decorator


# Global logger manager instance
_logger_manager: Optional[LoggerManager] = None


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggerManager:
    """Setup global logging configuration."""
    global _logger_manager

    if config is None:
        config = LoggingConfig()

    _logger_manager = LoggerManager(config)
    return _logger_manager


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get logger instance."""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = setup_logging()

    return _logger_manager.get_logger(name)


def log_context(**context):
    """Context manager for logging context."""
    return ContextManager(**context)


def get_execution_time() -> Optional[float]:
    """Execution time recorded by the last timed call in this context."""
    return run_context.get({}).get('execution_time')


def get_logging_stats() -> Dict[str, Any]:
    """Get logging statistics."""
    if _logger_manager:
        return _logger_manager.get_stats()
    return {}
