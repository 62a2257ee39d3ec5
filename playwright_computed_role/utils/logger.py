"""Logging configuration for playwright-computed-role."""

import logging
import os
import sys
from enum import IntEnum
from typing import Any, Dict, List, Optional

import structlog


class LogLevel(IntEnum):
    """Log levels, ordered by verbosity."""
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3


def configure_logging(verbose: int = 0) -> structlog.BoundLogger:
    """
    Configure structlog for playwright-computed-role.
    
    Args:
        verbose: Verbosity level (0-3)
        
    Returns:
        Configured logger instance
    """
    log_level = "ERROR"
    if verbose >= 3:
        log_level = "DEBUG"
    elif verbose >= 2:
        log_level = "INFO"
    elif verbose >= 1:
        log_level = "WARNING"
    
    is_tty = sys.stderr.isatty()
    
    processors: List[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    
    if is_tty and os.getenv("NO_COLOR") is None:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())
    
    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
    )
    
    logger = structlog.get_logger("playwright_computed_role")
    return logger.bind(verbose=verbose)


class LogLine:
    """Represents a structured log line."""
    
    def __init__(
        self,
        category: str,
        message: str,
        level: LogLevel = LogLevel.INFO,
        auxiliary: Optional[Dict[str, Any]] = None,
    ):
        self.category = category
        self.message = message
        self.level = level
        self.auxiliary = auxiliary or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert log line to dictionary."""
        return {
            "category": self.category,
            "level": self.level.name,
            **self.auxiliary,
        }


class ComputedRoleLogger:
    """Logger wrapper with category support and a verbosity gate."""
    
    _METHODS = {
        LogLevel.ERROR: "error",
        LogLevel.WARN: "warning",
        LogLevel.INFO: "info",
        LogLevel.DEBUG: "debug",
    }
    
    def __init__(self, logger: Any, verbose: int = 0):
        self.logger = logger
        self.verbose = verbose
    
    def log(self, log_line: LogLine) -> None:
        """Log a structured log line."""
        if log_line.level.value > self.verbose:
            return
        
        log_method = getattr(self.logger, self._METHODS[log_line.level], self.logger.info)
        log_method(log_line.message, **log_line.to_dict())
    
    def error(self, category: str, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self.log(LogLine(category, message, LogLevel.ERROR, kwargs))
    
    def warn(self, category: str, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self.log(LogLine(category, message, LogLevel.WARN, kwargs))
    
    def info(self, category: str, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self.log(LogLine(category, message, LogLevel.INFO, kwargs))
    
    def debug(self, category: str, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self.log(LogLine(category, message, LogLevel.DEBUG, kwargs))
    
    def child(self, **bindings: Any) -> "ComputedRoleLogger":
        """Create a child logger with additional context."""
        return ComputedRoleLogger(self.logger.bind(**bindings), self.verbose)


def get_logger(verbose: int = 0) -> ComputedRoleLogger:
    """Return a category logger over the package's structlog logger.
    
    Unlike configure_logging() this does not touch global structlog or
    stdlib configuration, so library code can call it freely.
    """
    return ComputedRoleLogger(structlog.get_logger("playwright_computed_role"), verbose)
