"""Configuration management utilities."""

import json
from pathlib import Path

from pydantic import ValidationError

from ..core.constants import CONFIG_FILE_NAME
from ..models.config import ClientConfig


class ConfigManager:
    """Manages client configuration."""

    def __init__(self, data_dir: Path):
        """Initialize config manager."""
        self.data_dir = data_dir
        self.config_file = data_dir / CONFIG_FILE_NAME

    def get_config(self) -> ClientConfig:
        """Load client configuration, falling back to defaults."""
        if not self.config_file.exists():
            return ClientConfig()
        try:
            data = json.loads(self.config_file.read_text())
            return ClientConfig.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"Invalid config file {self.config_file}: {e}")

    def save_config(self, config: ClientConfig) -> None:
        """Save client configuration."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(config.model_dump_json(indent=2))

    def update_config(self, **changes) -> ClientConfig:
        """Update selected settings and save them.

        Raises:
            ValueError: If a value is invalid
        """
        config = self.get_config()
        try:
            updated = ClientConfig.model_validate({**config.model_dump(), **changes})
        except ValidationError as e:
            raise ValueError(str(e))
        self.save_config(updated)
        return updated

    def reset(self) -> ClientConfig:
        """Reset configuration to defaults."""
        config = ClientConfig()
        self.save_config(config)
        return config
