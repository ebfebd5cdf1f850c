import os
import json
import platform
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, Optional

import keyring

from rexport.constants import (
    DEFAULT_HTTP_TIMEOUT,
    KEYRING_SERVICE,
    KEYRING_USERNAME,
)
from rexport.logging.config import LogLevel

ENV_PREFIX = "REXPORT_"


@dataclass
class ExportConfig:
    """Settings for the export orchestrator process."""

    remote_base_url: str = ""
    storage_root: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def keys(cls):
        return [f.name for f in fields(cls)]

    def update(self, values: Dict) -> "ExportConfig":
        """Apply known keys from ``values``, coercing to the field type."""
        for f in fields(self):
            if f.name not in values or values[f.name] in (None, ""):
                continue
            value = values[f.name]
            if f.type in (float, "float"):
                value = float(value)
            setattr(self, f.name, value)
        return self


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
            return Path(base_dir) / "rexport"
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "rexport"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / "rexport"
            return Path.home() / ".config" / "rexport"

    def _ensure_config_dir(self):
        os.makedirs(self.base_dir, exist_ok=True)

    def get_settings(self) -> Dict:
        """Raw settings from the settings file"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}

    def save_settings(self, settings: Dict) -> None:
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)

    def set_value(self, key: str, value: str) -> None:
        """Persist a single setting"""
        if key not in ExportConfig.keys():
            raise KeyError(f"Unknown setting '{key}'")
        # Validate the value before it is written
        ExportConfig().update({key: value})
        if key == "log_level":
            levels = [lev.value for lev in LogLevel]
            if value.upper() not in levels:
                raise ValueError(
                    f"Invalid log level '{value}', expected one of {', '.join(levels)}"
                )
            value = value.upper()
        settings = self.get_settings()
        settings[key] = value
        self.save_settings(settings)

    def load(self, environ: Optional[Dict[str, str]] = None) -> ExportConfig:
        """
        Resolve the effective configuration.

        Priority: environment (REXPORT_<KEY>) > settings file > defaults.
        """
        environ = os.environ if environ is None else environ
        config = ExportConfig().update(self.get_settings())
        env_values = {
            key: environ.get(f"{ENV_PREFIX}{key.upper()}")
            for key in ExportConfig.keys()
        }
        return config.update(env_values)

    def as_dict(self) -> Dict:
        return asdict(self.load())

    def store_payload_key(self, key_json: str) -> None:
        """Store the job payload encryption key in the system keyring"""
        keyring.set_password(KEYRING_SERVICE, KEYRING_USERNAME, key_json)

    def get_payload_key(self) -> Optional[str]:
        return keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)

    def delete_payload_key(self) -> None:
        keyring.delete_password(KEYRING_SERVICE, KEYRING_USERNAME)
