"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import jsonschema
import yaml

from ..api.exceptions import ConfigError
from ..constants import ENV_CONFIG_PATH, PROJECT_CONFIG_FILE, StoreApiType
from ..models.config import ToolConfig

logger = logging.getLogger(__name__)

_STRING = {"type": "string"}

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "version": {"type": ["string", "number"]},
        "publisher_display_name": _STRING,
        "flutter_executable": _STRING,
        "store": {
            "type": "object",
            "properties": {
                "type": {"enum": [t.value for t in StoreApiType]},
                "path": _STRING,
                "api": {"type": "string", "pattern": r"^[A-Za-z_][\w.]*:[A-Za-z_]\w*$"},
                "listing_language": _STRING,
                "options": {"type": "object"},
            },
            "additionalProperties": False,
        },
        "app": {
            "type": "object",
            "properties": {
                "id": _STRING,
                "package_identity_name": _STRING,
                "publisher_name": _STRING,
                "primary_name": _STRING,
                "publisher_display_name": _STRING,
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


class ConfigService:
    """Service for locating and loading store-tool configuration"""

    def __init__(self, project_root: Union[str, Path], config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            project_root: Project root directory
            config_path: Explicit configuration file (overrides lookup)
        """
        self.project_root = Path(project_root)
        self.config_path = self._locate(config_path)
        self._config: Optional[ToolConfig] = None

    def _locate(self, config_path: Optional[Union[str, Path]]) -> Optional[Path]:
        if config_path:
            return Path(config_path)

        env_path = os.environ.get(ENV_CONFIG_PATH)
        if env_path:
            return Path(env_path)

        candidate = self.project_root / PROJECT_CONFIG_FILE
        return candidate if candidate.is_file() else None

    @property
    def config(self) -> ToolConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self) -> ToolConfig:
        """Load configuration from file

        Returns:
            Loaded configuration, defaults when no file exists

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        if self.config_path is None:
            logger.debug("No configuration file, using defaults")
            self._config = ToolConfig()
            return self._config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {self.config_path}: {e}") from e

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        try:
            jsonschema.validate(data, CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"Invalid configuration at {location}: {e.message}") from e

        try:
            self._config = ToolConfig.from_dict(data)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._config
