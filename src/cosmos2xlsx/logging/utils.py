"""
Utility functions for cosmos2xlsx logging.

This module provides helper functions for data sanitization
and log file housekeeping.
"""

import re
from typing import Any, Dict, List, Tuple
from pathlib import Path
from datetime import datetime, timedelta
from cosmos2xlsx.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS

# Patterns masked in free text such as log messages and exception strings
_STRING_PATTERNS = [
    # Cosmos DB connection string keys
    (r'(AccountKey=)[^;\s]+', r'\1***'),
    # SAS signatures and other keyed URL parameters
    (r'([?&](?:sig|token|key|secret|password)=)[^&\s]+', r'\1***'),
    # Bearer / resource tokens
    (r'Bearer\s+[A-Za-z0-9\-._~+/]+=*', 'Bearer ***'),
    (r'(type=(?:master|resource)&ver=[^&]+&sig=)[^\s&]+', r'\1***'),
]


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively sanitize sensitive data from dictionaries, lists, and strings.

    Args:
        data: Data to sanitize (dict, list, str, or other)
        sensitive_keys: Tuple of keys/patterns to sanitize

    Returns:
        Any: Sanitized data with sensitive values replaced
    """
    if isinstance(data, dict):
        return sanitize_dict(data, sensitive_keys)
    elif isinstance(data, list):
        return sanitize_list(data, sensitive_keys)
    elif isinstance(data, str):
        return sanitize_string(data)
    else:
        return data


def sanitize_dict(data: Dict[str, Any], sensitive_keys: Tuple[str, ...]) -> Dict[str, Any]:
    """Sanitize values of a dictionary whose key looks sensitive"""
    sanitized = {}

    for key, value in data.items():
        key_lower = str(key).lower()

        is_sensitive = any(
            sensitive_key.lower() in key_lower
            for sensitive_key in sensitive_keys
        )

        if is_sensitive:
            if isinstance(value, str) and len(value) > 8:
                sanitized[key] = f"{value[:4]}...{value[-4:]}"
            else:
                sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_data(value, sensitive_keys)

    return sanitized


def sanitize_list(data: List[Any], sensitive_keys: Tuple[str, ...]) -> List[Any]:
    return [sanitize_data(item, sensitive_keys) for item in data]


def sanitize_string(data: str) -> str:
    """
    Mask secrets embedded in free text (connection strings, signed URLs).

    Args:
        data: String to sanitize

    Returns:
        str: Sanitized string
    """
    sanitized = data
    for pattern, replacement in _STRING_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)
    return sanitized


def mask_connection_string(connection_string: str) -> str:
    """Return a connection string that is safe to display"""
    if not connection_string:
        return ""
    return sanitize_string(connection_string)


def cleanup_old_logs(log_directory: Path, retention_days: int = LOG_RETENTION_DAYS) -> int:
    """
    Delete rotated log files older than the retention period.

    Returns the number of files removed. Files that cannot be inspected or
    removed are left in place.
    """
    if not log_directory.exists():
        return 0

    cutoff = (datetime.now() - timedelta(days=retention_days)).timestamp()
    removed = 0
    for rotated in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if rotated.stat().st_mtime < cutoff:
                rotated.unlink()
                removed += 1
        except OSError:
            continue
    return removed
