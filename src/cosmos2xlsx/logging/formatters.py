"""
Custom formatters for cosmos2xlsx logging.

This module provides a general formatter that masks secrets and a
specialized formatter for per-collection export events.
"""

import logging
from datetime import datetime
from .utils import sanitize_data, sanitize_string
from cosmos2xlsx.constants import SENSITIVE_KEYS

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Record attribute naming the collection a log entry belongs to
COLLECTION_SCOPE_ATTR = "export_collection"


def build_format(
    include_timestamps: bool = True,
    include_thread_info: bool = False,
    include_process_info: bool = False,
) -> str:
    """%-style format string, optional context goes in front of the message"""
    prefix = ["%(asctime)s"] if include_timestamps else []
    context = []
    if include_thread_info:
        context.append("[Thread:%(thread)d]")
    if include_process_info:
        context.append("[PID:%(process)d]")
    return " ".join(prefix + ["%(levelname)s", "[%(name)s]"] + context + ["%(message)s"])


class Cosmos2XlsxFormatter(logging.Formatter):
    """
    Formatter for general cosmos2xlsx log entries.

    Structured data passed as the message or as arguments is sanitized
    by key, and the rendered line is scrubbed for account keys and
    signed URL parameters.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__(
            fmt=build_format(include_timestamps, include_thread_info, include_process_info),
            datefmt=DATE_FORMAT,
        )

    def _sanitize_record(self, record: logging.LogRecord) -> None:
        if isinstance(record.msg, (dict, list)):
            record.msg = sanitize_data(record.msg, self.sensitive_keys)
        elif isinstance(record.args, dict):
            record.args = sanitize_data(record.args, self.sensitive_keys)
        elif isinstance(record.args, (tuple, list)):
            record.args = tuple(
                sanitize_data(arg, self.sensitive_keys)
                if isinstance(arg, (dict, list, str))
                else arg
                for arg in record.args
            )

    def format(self, record: logging.LogRecord) -> str:
        if not self.sanitize_sensitive:
            return super().format(record)
        self._sanitize_record(record)
        return sanitize_string(super().format(record))


class ExportEventFormatter(logging.Formatter):
    """
    Formatter for export event records.

    Renders the collection and event kind carried on the record
    in front of the message.
    """

    def __init__(self, sanitize_sensitive: bool = True):
        self.sanitize_sensitive = sanitize_sensitive
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        # Example: 2026-02-02 17:27:34 INFO [cosmos2xlsx.events] [orders] saved: Saved to ...
        timestamp = datetime.fromtimestamp(record.created).strftime(DATE_FORMAT)
        event = getattr(record, "export_event", "event")
        collection = getattr(record, COLLECTION_SCOPE_ATTR, None)
        scope = f"[{collection}] " if collection else ""

        line = (
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{scope}{event}: {record.getMessage()}"
        )

        details = getattr(record, "export_details", None)
        if details:
            rendered = ", ".join(f"{k}={v}" for k, v in details.items())
            line = f"{line} ({rendered})"

        if self.sanitize_sensitive:
            line = sanitize_string(line)
        return line


class MultiplexFormatter(logging.Formatter):
    """
    Formatter that delegates to different formatters based on the log record.

    Uses ExportEventFormatter for export events and the default formatter
    for everything else.
    """

    def __init__(
        self, default_formatter: logging.Formatter, event_formatter: logging.Formatter
    ):
        self.default_formatter = default_formatter
        self.event_formatter = event_formatter
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "export_event"):
            return self.event_formatter.format(record)
        return self.default_formatter.format(record)
