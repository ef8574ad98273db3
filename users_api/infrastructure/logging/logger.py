"""
Structured logging implementation.
"""

import logging
import json
from datetime import datetime
from typing import Any, Dict, Optional
from pathlib import Path

from users_api.domain.interfaces.base import ILogger


class StructuredLogger:
    """Structured logger implementation with JSON formatting.

    Files always get JSON lines. The console gets JSON too unless a plain
    console_format is given.
    """

    def __init__(self, name: str, level: str = "INFO", log_file: Optional[str] = None,
                 console_format: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear existing handlers
        self.logger.handlers.clear()

        formatter = StructuredFormatter()

        console_handler = logging.StreamHandler()
        if console_format:
            console_handler.setFormatter(logging.Formatter(console_format))
        else:
            console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message with context."""
        self._log(logging.CRITICAL, message, kwargs)

    def set_level(self, level: str) -> None:
        """Change the logger level at runtime."""
        self.logger.setLevel(getattr(logging, level.upper()))

    def close(self) -> None:
        """Flush and detach all handlers."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        """Internal logging method with context."""
        # exc_info belongs to the logging call, not to the context
        exc_info = context.pop('exc_info', None)
        extra = {
            'context': context,
            'timestamp': datetime.now().isoformat(),
            'component': context.get('component', 'unknown')
        }

        self.logger.log(level, message, exc_info=exc_info, extra=extra)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': getattr(record, 'timestamp', datetime.now().isoformat()),
            'level': record.levelname,
            'component': getattr(record, 'component', 'unknown'),
            'message': record.getMessage(),
            'logger': record.name
        }

        context = getattr(record, 'context', {})
        if context:
            log_data['context'] = context

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class LoggerAdapter:
    """Templated logging on top of a structured logger.

    The rendered message goes out as the log line; the raw template and
    arguments travel in the context so log consumers can group entries
    by template.
    """

    def __init__(self, logger: ILogger, component: str = "unknown"):
        self._logger = logger
        self._component = component

    def log_information(self, template: str, *args: Any) -> None:
        self._logger.info(
            template.format(*args),
            component=self._component,
            template=template,
            args=[str(arg) for arg in args],
        )

    def log_error(self, exception: BaseException, template: str, *args: Any) -> None:
        self._logger.error(
            template.format(*args),
            component=self._component,
            template=template,
            args=[str(arg) for arg in args],
            error_type=type(exception).__name__,
            error_message=str(exception),
            exc_info=(type(exception), exception, exception.__traceback__),
        )


class LoggerFactory:
    """Factory for creating loggers with consistent configuration."""

    @staticmethod
    def create_logger(name: str, level: str = "INFO", log_file: Optional[str] = None,
                      console_format: Optional[str] = None) -> ILogger:
        """Create a structured logger instance."""
        return StructuredLogger(name, level, log_file, console_format)

    @staticmethod
    def create_component_logger(component_name: str, base_config: Dict[str, Any]) -> ILogger:
        """Create a logger for a specific component."""
        log_level = base_config.get('log_level', 'INFO')
        log_dir = base_config.get('log_dir', 'logs')

        log_file = None
        if log_dir:
            log_file = f"{log_dir}/{component_name}.log"

        return StructuredLogger(
            f"users_api.{component_name}",
            log_level,
            log_file,
            console_format=base_config.get('log_format')
        )
