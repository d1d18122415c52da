"""Configuration providers - abstract and local-file implementations."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from swarmthing.config.schema import deep_merge, validate_config
from swarmthing.utils.logger import get_logger

logger = get_logger("config.providers")


class ConfigProvider(ABC):
    """Abstract base class for configuration providers."""

    @abstractmethod
    async def load(self) -> dict[str, Any]:
        """Load configuration from the provider."""
        pass

    @abstractmethod
    async def save(self, config: dict[str, Any]) -> None:
        """Save configuration to the provider."""
        pass

    @property
    def user_config(self) -> dict[str, Any]:
        """Values set by the user, without the defaults merged in."""
        return {}


class LocalFileConfigProvider(ConfigProvider):
    """Configuration provider that stores config in a local JSON file.

    The file holds only what the user changed; defaults are merged in on load.
    """

    def __init__(
        self,
        config_path: Path,
        defaults: dict[str, Any] | None = None,
    ):
        self.config_path = config_path
        self.defaults = defaults or {}
        self._last_valid_config: dict[str, Any] | None = None
        self._user_config: dict[str, Any] | None = None

    @property
    def user_config(self) -> dict[str, Any]:
        return dict(self._user_config or {})

    async def load(self) -> dict[str, Any]:
        """Load configuration from file, creating it with defaults if missing.

        Raises:
            ConfigValidationError: when the merged configuration is invalid.
        """
        if not self.config_path.exists():
            logger.info(
                "Config file not found, creating with defaults",
                path=str(self.config_path),
            )
            await self.save({})
            return self.defaults.copy()

        try:
            config = json.loads(self.config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(
                "Invalid JSON syntax in config file",
                error=str(e),
                line=e.lineno,
                column=e.colno,
                path=str(self.config_path),
            )
            if self._last_valid_config is not None:
                logger.warning(
                    "Using last valid configuration due to JSON error",
                    path=str(self.config_path),
                )
                return self._last_valid_config.copy()
            logger.warning(
                "No previous valid config, using defaults",
                path=str(self.config_path),
            )
            return self.defaults.copy()

        if not isinstance(config, dict):
            config = {}
        merged = validate_config(deep_merge(self.defaults, config))
        self._user_config = config
        self._last_valid_config = merged.copy()
        logger.debug("Config loaded from file", path=str(self.config_path))
        return merged

    async def save(self, config: dict[str, Any]) -> None:
        """Atomically save the user configuration to file."""
        validate_config(deep_merge(self.defaults, config))

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.config_path.with_suffix(".tmp")
            content = json.dumps(config, ensure_ascii=False, indent=2)
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(self.config_path)
        except OSError as e:
            logger.error(
                "Failed to save config",
                error=str(e),
                path=str(self.config_path),
            )
            raise

        self._user_config = dict(config)
        self._last_valid_config = deep_merge(self.defaults, config)
        logger.debug("Config saved to file", path=str(self.config_path))
