"""
Logging configuration for cosmos2xlsx.

Holds the log levels, the LogConfig dataclass and the lookup of the
platform specific directory the log file is written to.
"""

import logging
import os
import platform
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from cosmos2xlsx.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    """Log levels accepted by cosmos2xlsx"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def numeric(self) -> int:
        return getattr(logging, self.value)

    @classmethod
    def parse(cls, value: Any) -> Optional["LogLevel"]:
        """Return the level named by value (case-insensitive), or None"""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass
class LogConfig:
    """Configuration class for cosmos2xlsx logging"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    # File handler level, console only shows warnings and above
    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    include_timestamps: bool = True
    include_thread_info: bool = False
    include_process_info: bool = False

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "LogConfig":
        """Build a config honouring the log_level stored in settings.json"""
        config = cls()
        level = LogLevel.parse(settings.get("log_level"))
        if level is not None:
            config = replace(config, default_level=level)
        return config


def _platform_log_directory() -> Path:
    system = platform.system().lower()
    if system == "windows":
        appdata = Path(os.environ.get("APPDATA", ""))
        return (appdata if appdata.exists() else Path.home()) / LOG_FILE_NAME / "logs"
    if system == "darwin":
        return Path.home() / "Library" / "Logs" / LOG_FILE_NAME
    data_home = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(data_home) / LOG_FILE_NAME / "logs"


def get_log_directory() -> Path:
    """
    Return the log directory, creating it when missing.

    Windows uses %APPDATA%/cosmos2xlsx/logs, macOS ~/Library/Logs/cosmos2xlsx
    and everything else $XDG_DATA_HOME/cosmos2xlsx/logs. When that directory
    cannot be created, ./logs is used instead.
    """
    log_dir = _platform_log_directory()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path.cwd() / "logs"
        log_dir.mkdir(exist_ok=True)
    return log_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    """Full path of the active log file"""
    return get_log_directory() / (config or LogConfig()).log_filename
