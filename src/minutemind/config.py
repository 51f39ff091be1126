"""Configuration management for MinuteMind."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from minutemind.utils.logger import get_logger

APP_NAME = "minutemind"
DATA_DIR_ENV = "MINUTEMIND_DATA_DIR"

logger = get_logger("config")


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["auto", "json", "sqlite", "memory"] = Field(default="auto")
    path: Optional[str] = Field(default=None)


class PomodoroConfig(BaseModel):
    """Focus timer configuration."""

    duration_seconds: int = Field(default=1500, ge=1)
    notifier: Literal["console", "desktop", "none"] = Field(default="console")
    notify_failure_threshold: int = Field(default=3, ge=1)


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)
    compact: bool = Field(default=False)


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    pomodoro: PomodoroConfig = Field(default_factory=PomodoroConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def default_data_dir() -> Path:
    """Directory holding the task store, overridable through the environment."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override)
    return Path(user_data_dir(APP_NAME))


class ConfigManager:
    """Manages MinuteMind configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.data_dir = default_data_dir()
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, json.JSONDecodeError, ValidationError) as e:
                # If config is corrupted, fall back to defaults
                logger.warning("ignoring unreadable config %s: %s", self.config_file, e)
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration value
            pydantic.ValidationError: If the value is invalid for the key
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def storage_path(self, suffix: str) -> Path:
        """Resolve the store file, honouring an explicit storage.path."""
        configured = self.config.storage.path
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / f"store.{suffix}"


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager


def reset_config_manager() -> None:
    """Drop the cached manager so the next call re-reads the filesystem."""
    global _config_manager
    _config_manager = None
