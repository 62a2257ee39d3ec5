"""Shared utilities."""

from .logger import ComputedRoleLogger, LogLevel, configure_logging, get_logger
from .text import join_normalised, normalise_spaces

__all__ = [
    "ComputedRoleLogger",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "join_normalised",
    "normalise_spaces",
]
