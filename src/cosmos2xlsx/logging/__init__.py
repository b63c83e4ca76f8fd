"""
cosmos2xlsx Logging Module

This module provides logging for the cosmos2xlsx CLI tool: a single
daily-rotated log file in a platform specific directory, export event
logging and automatic sanitization of secrets such as account keys.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- Export event logging with collection context
- Automatic sanitization of connection strings and keys
- Configurable log levels and formatting
"""

from .logger import (
    get_logger,
    setup_logging,
    log_application_event,
    log_export_event,
    collection_scope,
)
from .config import LogConfig, LogLevel, get_log_directory
from .utils import sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_application_event",
    "log_export_event",
    "collection_scope",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory",
]
