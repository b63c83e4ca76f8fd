"""
Main logging module for cosmos2xlsx.

Configures the "cosmos2xlsx" logger hierarchy: a daily rotated log file
that receives everything at the configured level, and a stderr handler
for warnings and errors.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from .config import LogConfig, get_log_file_path
from .formatters import (
    COLLECTION_SCOPE_ATTR,
    Cosmos2XlsxFormatter,
    ExportEventFormatter,
    MultiplexFormatter,
)
from .utils import cleanup_old_logs


_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


class CollectionScopeFilter(logging.Filter):
    """
    Rejects records scoped to a collection.

    Those records are already shown on the console by the export progress
    observer, so they are kept for the log file only.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not hasattr(record, COLLECTION_SCOPE_ATTR)


def _default_config() -> LogConfig:
    """LogConfig from settings.json, or the defaults when it cannot be read"""
    from cosmos2xlsx.utils.config_store import ConfigStore

    try:
        return LogConfig.from_settings(ConfigStore().get_settings())
    except OSError:
        return LogConfig()


def _build_file_handler(config: LogConfig, log_file_path: Path) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when="midnight",
        interval=1,
        backupCount=config.log_retention_days,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(config.default_level.numeric)
    handler.setFormatter(
        MultiplexFormatter(
            Cosmos2XlsxFormatter(
                include_timestamps=config.include_timestamps,
                include_thread_info=config.include_thread_info,
                include_process_info=config.include_process_info,
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys,
            ),
            ExportEventFormatter(sanitize_sensitive=config.sanitize_sensitive_data),
        )
    )
    return handler


def _build_console_handler(config: LogConfig) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.console_level.numeric)
    handler.addFilter(CollectionScopeFilter())
    handler.setFormatter(
        Cosmos2XlsxFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    return handler


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the cosmos2xlsx logging system.

    Args:
        config: LogConfig instance, read from settings.json if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    config = config or _default_config()
    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("cosmos2xlsx")
    root_logger.setLevel(config.default_level.numeric)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_file_handler(config, log_file_path))
    root_logger.addHandler(_build_console_handler(config))

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        root_logger.debug("Could not clean up rotated log files")

    _logging_configured = True
    get_logger("cosmos2xlsx.setup").info(
        f"Logging initialized - File: {log_file_path}, Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'cosmos2xlsx.export.writer')

    Returns:
        logging.Logger: Logger instance
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "cosmos2xlsx.app"
) -> None:
    """
    Log application-level events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["app_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)


def log_export_event(
    event: str,
    message: str,
    collection: Optional[str] = None,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "cosmos2xlsx.events"
) -> None:
    """
    Log a per-collection export event.

    Args:
        event: Event kind (e.g. 'page_retrieved', 'saved')
        message: Human readable message
        collection: Collection the event belongs to
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {
        "export_event": event,
        COLLECTION_SCOPE_ATTR: collection,
        "export_details": details or {},
    }

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra=extra)


def collection_scope(collection: str) -> Dict[str, Any]:
    """`extra` for a log record about one collection, kept out of the console"""
    return {COLLECTION_SCOPE_ATTR: collection}
