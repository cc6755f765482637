"""Configuration service for manpage-cli.

Loads and saves ``config.json`` in the platformdirs config directory and
offers dot-separated key access (``converter.command``) for the ``config``
command group. A missing file simply means defaults; nothing is written
until a value is changed.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from manpage_cli.models.config_models import AppConfig


class ConfigService:
    """Single source of truth for the persisted configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("manpage_cli"))
        self.config_path = self.config_dir / "config.json"
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, falling back to defaults."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
        except (OSError, PydanticValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to disk."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If any part of the key does not exist
        """
        return _get_from(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        The whole config is re-validated so a bad value never reaches disk.
        """
        self.get(key)
        parts = key.split(".")
        data = self.config.model_dump()
        current = data
        for part in parts[:-1]:
            current = current[part]
        current[parts[-1]] = value

        try:
            self._config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid value for '{key}': {e}") from e
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset the whole configuration, or one key, to defaults."""
        if key is None:
            self._config = None
            if self.config_path.exists():
                self.config_path.unlink()
            return

        default_value = _get_from(AppConfig(), key)
        self.set(key, default_value)


def _get_from(config: AppConfig, key: str) -> Any:
    value: Any = config
    for part in key.split("."):
        if not isinstance(value, BaseModel) or part not in type(value).model_fields:
            raise KeyError(key)
        value = getattr(value, part)
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide ConfigService."""
    return ConfigService()
