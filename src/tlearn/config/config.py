"""
Configuration for the t-learn shell, stored in ~/.tlearn/config.json.

Only values the user has set are meaningful; anything missing or null falls
back to DEFAULTS.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


DEFAULTS = {
    "api_url": "http://localhost:8080",
    "request_timeout": 30.0,
    "simple": False,
    "debug": False,
    "welcome": True,
}


class Config(BaseModel):
    """User settings. A None field means "use the default"."""

    model_config = {"extra": "ignore"}  # _comment and keys from newer versions

    api_url: Optional[str] = Field(default=None, description="Base URL of the t-learn API")
    request_timeout: Optional[float] = Field(
        default=None, gt=0, description="Timeout for API requests (seconds)"
    )
    simple: Optional[bool] = Field(default=None, description="Use the plain input() shell")
    debug: Optional[bool] = Field(default=None, description="Log debug output to stderr")
    welcome: Optional[bool] = Field(default=None, description="Show the welcome line on startup")

    @field_validator("api_url")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_url must start with http:// or https://, got '{value}'")
        return value.rstrip("/")

    def get(self, key: str, default: Any = None) -> Any:
        """Value of a setting, else its DEFAULTS entry, else ``default``."""
        value = getattr(self, key, None)
        if value is None:
            return DEFAULTS.get(key, default)
        return value


class ConfigManager:
    """Reads and writes the config file.

    The file keeps whatever else it contains (comments, unknown keys); only
    known settings are touched.
    """

    CONFIG_DIR = Path.home() / ".tlearn"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self, config_file: Optional[Path] = None):
        self._config_file = config_file
        self._config: Optional[Config] = None

    @property
    def path(self) -> Path:
        return self._config_file or self.CONFIG_FILE

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self.load()
        return self._config

    # =========================================================================
    # File access
    # =========================================================================

    def _read_raw(self) -> dict[str, Any]:
        """File contents as a dict; {} when missing or unreadable."""
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Invalid config file {self.path} ({e}), using defaults")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Config file {self.path} is not a JSON object, using defaults")
            return {}
        return data

    def _write_raw(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2) + "\n")

    def load(self, create_if_missing: bool = True) -> Config:
        """Load settings from the config file.

        Args:
            create_if_missing: Write a file listing the defaults on first use.

        Returns:
            The loaded Config; an empty Config if the file is missing or invalid.
        """
        if not self.path.exists():
            if create_if_missing:
                self._write_raw({"_comment": "t-learn shell configuration file", **DEFAULTS})
            return Config()

        try:
            return Config.model_validate(self._read_raw())
        except ValidationError as e:
            logger.warning(f"Invalid config values in {self.path} ({e}), using defaults")
            return Config()

    def save(self, config: Optional[Config] = None) -> Path:
        """Write every non-None setting to the file and return its path."""
        if config is not None:
            self._config = config
        data = self._read_raw()
        data.update(self.config.model_dump(exclude_none=True))
        self._write_raw(data)
        return self.path

    # =========================================================================
    # Settings
    # =========================================================================

    def set(self, key: str, value: Any) -> None:
        """Validate and persist one setting.

        Raises:
            ValueError: If the key is unknown or the value is invalid.
        """
        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")
        current = self.load().model_dump()
        current[key] = value
        # ValidationError is a ValueError
        self._config = Config.model_validate(current)
        self.save()

    def unset(self, key: str) -> None:
        """Remove a setting from the file so its default applies again."""
        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")
        data = self._read_raw()
        data.pop(key, None)
        self._write_raw(data)
        self._config = self.load()

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def list_settings(self) -> dict[str, Any]:
        """Settings whose value differs from the default."""
        return {
            key: value
            for key, value in self.config.model_dump(exclude_none=True).items()
            if DEFAULTS.get(key) != value
        }

    def reset(self) -> None:
        """Delete the config file; every setting returns to its default."""
        self._config = Config()
        self.path.unlink(missing_ok=True)


_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def get_config() -> Config:
    """Settings of the process-wide ConfigManager."""
    return get_config_manager().config
