import os
import json
import platform
from pathlib import Path
from typing import Any, Dict, Optional
import keyring

from cosmos2xlsx.constants import (
    APP_NAME,
    KEYRING_SERVICE,
    KEYRING_CONNECTION_USER,
    SETTING_KEYS,
)


class ConfigStore:
    def __init__(self):
        self.base_dir = self._get_config_dir()
        self.settings_file = self.base_dir / "settings.json"
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / APP_NAME
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / APP_NAME
            return Path.home() / f".{APP_NAME}"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def get_settings(self) -> Dict[str, Any]:
        """Get all stored settings"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                settings = json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}
        return settings if isinstance(settings, dict) else {}

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.get_settings().get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Store a single setting in settings.json"""
        if key not in SETTING_KEYS:
            raise ValueError(
                f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}"
            )
        settings = self.get_settings()
        settings[key] = value
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)

    def unset_setting(self, key: str) -> bool:
        settings = self.get_settings()
        if key not in settings:
            return False
        del settings[key]
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
        return True

    def store_connection_string(self, connection_string: str) -> None:
        """Store the Cosmos DB connection string securely in the system keyring"""
        keyring.set_password(KEYRING_SERVICE, KEYRING_CONNECTION_USER, connection_string)

    def get_connection_string(self) -> Optional[str]:
        """Retrieve the stored connection string, if any"""
        return keyring.get_password(KEYRING_SERVICE, KEYRING_CONNECTION_USER)

    def delete_connection_string(self) -> bool:
        """Remove the stored connection string. Returns False if none was stored"""
        if not self.get_connection_string():
            return False
        keyring.delete_password(KEYRING_SERVICE, KEYRING_CONNECTION_USER)
        return True
